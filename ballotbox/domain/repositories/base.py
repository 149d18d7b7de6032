"""Base repository interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ballotbox.domain.entities.base import BaseEntity


T = TypeVar("T", bound=BaseEntity)


class BaseRepository(ABC, Generic[T]):
    """全リポジトリの基底インターフェース."""

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> T | None:
        """IDでエンティティを取得する."""
        pass

    @abstractmethod
    async def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[T]:
        """全エンティティを取得する."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """エンティティを作成する."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """エンティティを更新する."""
        pass

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """エンティティを削除する."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """件数を返す."""
        pass
