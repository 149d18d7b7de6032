"""認証ゲートウェイのインターフェース."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from ballotbox.domain.value_objects.auth import AuthEvent, AuthSession, SignUpResult


AuthStateListener = Callable[[AuthEvent, AuthSession | None], Awaitable[None]]
Unsubscribe = Callable[[], None]


class IAuthGateway(Protocol):
    """バックエンドの認証サブシステムへのインターフェース.

    セッション変更イベントは発生順に1件ずつ配信し、
    前のリスナー呼び出しの完了を待ってから次を配信する。
    """

    async def get_session(self) -> AuthSession | None:
        """現在のセッションを1回だけ取得する."""
        ...

    def on_auth_state_change(self, listener: AuthStateListener) -> Unsubscribe:
        """セッション変更イベントを購読する.

        Returns:
            購読を解除する関数
        """
        ...

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """メールアドレスとパスワードでサインインする.

        Raises:
            AuthFailureError: 認証情報が正しくない場合
        """
        ...

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        """ユーザーを登録する.

        メール確認が必要な設定ではセッションは発行されないが、
        ユーザーIDは常に返す。

        Raises:
            AuthFailureError: 登録できなかった場合
        """
        ...

    async def sign_out(self) -> None:
        """バックエンドのセッションを無効化する."""
        ...
