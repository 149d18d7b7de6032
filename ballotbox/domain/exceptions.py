"""ドメイン層の例外定義.

投票プロトコルとセッション解決で呼び出し側が区別する必要のある
失敗条件をここで定義する。
"""

from typing import Any


class BallotBoxException(Exception):
    """ドメイン例外の基底クラス."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientBackendError(BallotBoxException):
    """バックエンドとの通信・サービス障害.

    セッション解決では安全なロールへの縮退で回復し、
    UIでは再試行可能なメッセージとして扱う。
    """


class RoleLookupFailure(TransientBackendError):
    """ロール割当の取得失敗。常にvoterへ縮退し、呼び出し側には出さない."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Failed to look up roles for user {user_id}: {reason}",
            {"user_id": user_id, "reason": reason},
        )
        self.user_id = user_id


class DuplicateVoteError(BallotBoxException):
    """同じ (voter_id, position_id) の投票が既に存在する.

    一意制約による正常な拒否であり、エラーとしてはログに残さない。
    """

    def __init__(self, voter_id: str, position_id: str):
        super().__init__(
            "Ballot already exists for this voter and position",
            {"voter_id": voter_id, "position_id": position_id},
        )
        self.voter_id = voter_id
        self.position_id = position_id


class InvalidBallotError(BallotBoxException):
    """投票の事前条件を満たさない（役職が締切済み、別役職の候補者など）.

    バックエンドの障害による失敗は例外ではなく、CAST_FAILEDとして報告する。
    """


class AuthFailureError(BallotBoxException):
    """サインイン・サインアップの失敗。メッセージはそのまま表示する."""

