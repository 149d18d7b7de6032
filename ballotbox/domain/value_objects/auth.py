"""認証関連の Value Object."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AuthEvent(Enum):
    """バックエンドから配信されるセッション変更イベントの種類."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


@dataclass(frozen=True)
class Identity:
    """認証済みの主体.

    バックエンドの認証サブシステムが発行する。コアはセッションの間だけ
    参照を保持する。
    """

    id: str
    email: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """認証セッション（通信用の資格情報を含む）."""

    identity: Identity
    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class SignUpResult:
    """サインアップ結果.

    メール確認が必要な設定ではセッションは発行されない。
    """

    identity: Identity
    session: AuthSession | None = None
