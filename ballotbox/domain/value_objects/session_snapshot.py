"""SessionSnapshot Value Object."""

from dataclasses import dataclass, replace

from ballotbox.domain.value_objects.auth import AuthSession, Identity
from ballotbox.domain.value_objects.role import Role


@dataclass(frozen=True)
class SessionSnapshot:
    """「誰が、どの権限でログインしているか」の一貫したスナップショット.

    アプリケーションの他の部分が読む唯一の情報源。書き込むのは
    SessionResolverだけで、置き換えは常に丸ごと行う。

    Attributes:
        identity: 現在のユーザー（未ログインならNone）
        role: 解決済みロール（未ログインならUNKNOWN）
        ready: 初回の解決が完了したかどうか
        session: 通信用の資格情報
    """

    identity: Identity | None = None
    role: Role = Role.UNKNOWN
    ready: bool = False
    session: AuthSession | None = None

    @classmethod
    def initial(cls) -> "SessionSnapshot":
        """起動直後（未解決）のスナップショットを返す."""
        return cls()

    @classmethod
    def signed_out(cls) -> "SessionSnapshot":
        """サインアウト後のスナップショットを返す."""
        return cls(identity=None, role=Role.UNKNOWN, ready=True, session=None)

    @property
    def is_authenticated(self) -> bool:
        """ログイン済みかどうか."""
        return self.identity is not None

    @property
    def is_admin(self) -> bool:
        """解決済みで管理者かどうか."""
        return self.ready and self.identity is not None and self.role.is_admin

    def evolve(self, **changes: object) -> "SessionSnapshot":
        """一部のフィールドを変更した新しいスナップショットを返す."""
        return replace(self, **changes)  # type: ignore[arg-type]
