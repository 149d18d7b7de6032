"""Base repository implementation for infrastructure layer."""

import logging
import uuid

from typing import Any, Generic, TypeVar

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.base import BaseEntity
from ballotbox.domain.repositories.session_adapter import ISessionAdapter
from ballotbox.infrastructure.exceptions import DatabaseError


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)


def row_to_dict(row: Any) -> dict[str, Any]:
    """text() SQLの結果行をdictに変換する."""
    if hasattr(row, "_asdict"):
        return row._asdict()  # type: ignore[no-any-return]
    if hasattr(row, "_mapping"):
        return dict(row._mapping)
    return dict(row)


def new_id() -> str:
    """新しいエンティティIDを発行する."""
    return str(uuid.uuid4())


class BaseRepositoryImpl(Generic[T]):
    """Base repository implementation using ISessionAdapter.

    text() SQLとPydanticの行モデルを使い、テーブル名・カラム・並び順だけを
    サブクラスで宣言すれば取得系の共通処理が使えるようにする。
    AsyncSessionとISessionAdapterのどちらでも動作する。

    Type Parameters:
        T: Domain entity type that extends BaseEntity

    Note:
        サブクラスは _table_name, _columns, model_class と
        _to_entity() を定義すること。
    """

    _table_name: str = ""
    _columns: tuple[str, ...] = ()
    _order_by: str = "id ASC"

    def __init__(
        self,
        session: AsyncSession | ISessionAdapter,
        entity_class: type[T],
        model_class: type[PydanticBaseModel],
    ):
        self.session = session
        self.entity_class = entity_class
        self.model_class = model_class

    @property
    def _select_columns(self) -> str:
        return ", ".join(self._columns)

    @property
    def _entity_label(self) -> str:
        return self.entity_class.__name__

    async def get_by_id(self, entity_id: str) -> T | None:
        """Get entity by ID."""
        try:
            query = text(
                f"SELECT {self._select_columns} FROM {self._table_name} WHERE id = :id"
            )
            result = await self.session.execute(query, {"id": entity_id})
            row = result.first()
            return self._dict_to_entity(row_to_dict(row)) if row else None
        except SQLAlchemyError as e:
            logger.error(f"Database error getting {self._entity_label} by ID: {e}")
            raise DatabaseError(
                f"Failed to get {self._entity_label} by ID",
                {"id": entity_id, "error": str(e)},
            ) from e

    async def get_all(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[T]:
        """Get all entities with optional pagination."""
        sql = (
            f"SELECT {self._select_columns} FROM {self._table_name} "
            f"ORDER BY {self._order_by}"
        )
        params: dict[str, Any] = {}
        if limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            params = {"limit": limit, "offset": offset or 0}

        try:
            result = await self.session.execute(text(sql), params or None)
            return [self._dict_to_entity(row_to_dict(r)) for r in result.fetchall()]
        except SQLAlchemyError as e:
            logger.error(f"Database error getting all {self._entity_label}: {e}")
            raise DatabaseError(
                f"Failed to get all {self._entity_label}", {"error": str(e)}
            ) from e

    async def delete(self, entity_id: str) -> bool:
        """Delete an entity by ID."""
        try:
            query = text(f"DELETE FROM {self._table_name} WHERE id = :id")
            result = await self.session.execute(query, {"id": entity_id})
            await self.session.commit()
            return result.rowcount > 0  # type: ignore[attr-defined]
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting {self._entity_label}: {e}")
            await self.session.rollback()
            raise DatabaseError(
                f"Failed to delete {self._entity_label}",
                {"id": entity_id, "error": str(e)},
            ) from e

    async def count(self) -> int:
        """Count total number of entities."""
        try:
            result = await self.session.execute(
                text(f"SELECT COUNT(*) FROM {self._table_name}")
            )
            count = result.scalar()
            return count if count is not None else 0
        except SQLAlchemyError as e:
            logger.error(f"Database error counting {self._entity_label}: {e}")
            raise DatabaseError(
                f"Failed to count {self._entity_label}", {"error": str(e)}
            ) from e

    async def _fetch_all(self, sql: str, params: dict[str, Any]) -> list[T]:
        """SELECT文を実行してエンティティのリストを返す."""
        result = await self.session.execute(text(sql), params)
        return [self._dict_to_entity(row_to_dict(r)) for r in result.fetchall()]

    async def _execute_returning(self, sql: str, params: dict[str, Any]) -> T | None:
        """INSERT/UPDATE ... RETURNING を実行してコミットする."""
        result = await self.session.execute(text(sql), params)
        row = result.first()
        await self.session.commit()
        return self._dict_to_entity(row_to_dict(row)) if row else None

    def _dict_to_entity(self, data: dict[str, Any]) -> T:
        """Convert a row dictionary to a domain entity via the row model."""
        return self._to_entity(self.model_class.model_validate(data))

    def _to_entity(self, model: Any) -> T:
        """Convert database model to domain entity."""
        raise NotImplementedError("Subclass must implement _to_entity")
