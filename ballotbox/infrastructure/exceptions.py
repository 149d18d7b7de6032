"""インフラ層の例外定義."""

from typing import Any


class InfrastructureException(Exception):
    """インフラ層の例外の基底クラス."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class DatabaseError(InfrastructureException):
    """データベース操作の失敗."""


class UpdateError(DatabaseError):
    """更新対象が存在しない、または更新できなかった."""


class ConfigurationError(InfrastructureException):
    """設定値が不足している、または不正."""


class AuthenticationError(InfrastructureException):
    """外部サービスの認証設定の不備.

    利用者の認証情報の誤りではなく、APIキーの欠落など
    運用側で解決すべき問題を表す。
    """

    def __init__(self, service: str, reason: str, solution: str | None = None):
        message = f"{service}の認証に失敗しました: {reason}"
        if solution:
            message += f"\n{solution}"
        super().__init__(message, {"service": service, "reason": reason})
        self.service = service
        self.reason = reason
        self.solution = solution
