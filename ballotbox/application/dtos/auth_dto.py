"""認証に関するDTO."""

from dataclasses import dataclass


@dataclass
class SignInInputDto:
    """サインインの入力DTO."""

    email: str
    password: str


@dataclass
class SignUpInputDto:
    """サインアップの入力DTO（プロフィール情報を含む）."""

    email: str
    password: str
    name: str
    department: str | None = None
    registration_number: str | None = None
    phone_number: str | None = None


@dataclass
class AuthOutputDto:
    """サインイン・サインアップの出力DTO.

    失敗時のerror_messageはバックエンドのメッセージをそのまま保持する。
    """

    success: bool
    user_id: str | None = None
    requires_confirmation: bool = False
    error_message: str | None = None
