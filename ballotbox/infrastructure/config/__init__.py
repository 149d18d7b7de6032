"""設定とデータベース接続."""

from ballotbox.infrastructure.config.async_database import AsyncDatabase
from ballotbox.infrastructure.config.settings import Settings, get_settings


__all__ = ["AsyncDatabase", "Settings", "get_settings"]
