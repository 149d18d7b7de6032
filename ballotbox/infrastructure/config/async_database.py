"""非同期DBエンジンの管理."""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ballotbox.infrastructure.config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


class AsyncDatabase:
    """asyncpgエンジンとセッションメーカーを遅延生成して保持する.

    エンジンは最初に使われたイベントループに結び付くため、
    CLIの各コマンドは終了時に dispose() し、次のコマンドで作り直す。
    """

    def __init__(self, settings: Settings | None = None):
        self.url = (settings or get_settings()).get_async_database_url()
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(self.url, pool_pre_ping=True)
            self._session_maker = None
        return self._engine

    @property
    def async_session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._session_maker

    async def dispose(self) -> None:
        """エンジンの接続プールを閉じる。未生成なら何もしない."""
        engine, self._engine, self._session_maker = self._engine, None, None
        if engine is not None:
            await engine.dispose()
            logger.debug("Disposed database engine")
