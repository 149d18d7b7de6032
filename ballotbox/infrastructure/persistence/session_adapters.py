"""同期SessionをISessionAdapterとして使うためのアダプター.

本番のリポジトリはAsyncSessionをそのまま受け取る。SQLiteの同期エンジンで
リポジトリを動かすとき（統合テストなど）はこのアダプターで包む。
"""

from typing import Any

from sqlalchemy.engine.result import Result
from sqlalchemy.orm import Session

from ballotbox.domain.repositories.session_adapter import ISessionAdapter


class SyncSessionAdapter(ISessionAdapter):
    """同期Sessionを非同期インターフェースで包む.

    awaitしても処理は呼び出し元のスレッドでその場で実行される。
    """

    def __init__(self, session: Session):
        self.session = session

    async def execute(
        self, statement: Any, params: dict[str, Any] | None = None
    ) -> Result[Any]:
        return self.session.execute(statement, params or {})

    async def commit(self) -> None:
        self.session.commit()

    async def rollback(self) -> None:
        self.session.rollback()

    async def close(self) -> None:
        self.session.close()
