"""リポジトリが使うDBセッションのポート.

リポジトリ実装はAsyncSessionか、このインターフェースを実装した
アダプターのどちらでも受け取れる。
"""

from abc import ABC, abstractmethod
from typing import Any


class ISessionAdapter(ABC):
    """AsyncSessionと同じ呼び出し方ができるセッション."""

    @abstractmethod
    async def execute(self, statement: Any, params: dict[str, Any] | None = None) -> Any:
        """SQLを実行して結果を返す."""

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    @abstractmethod
    async def close(self) -> None: ...
