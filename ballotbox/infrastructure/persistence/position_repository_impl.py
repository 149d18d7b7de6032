"""Position repository implementation using SQLAlchemy."""

import logging

from datetime import datetime
from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.position import Position
from ballotbox.domain.repositories.position_repository import PositionRepository
from ballotbox.domain.repositories.session_adapter import ISessionAdapter
from ballotbox.infrastructure.exceptions import DatabaseError, UpdateError
from ballotbox.infrastructure.persistence.base_repository_impl import (
    BaseRepositoryImpl,
    new_id,
)


logger = logging.getLogger(__name__)


class PositionModel(PydanticBaseModel):
    """Position database model."""

    id: str
    title: str
    description: str | None = None
    display_order: int = 0
    is_active: bool = True
    created_at: datetime | None = None


class PositionRepositoryImpl(BaseRepositoryImpl[Position], PositionRepository):
    """Position repository implementation using SQLAlchemy."""

    _table_name = "positions"
    _columns = (
        "id",
        "title",
        "description",
        "display_order",
        "is_active",
        "created_at",
    )
    _order_by = "display_order ASC, created_at ASC"

    def __init__(self, session: AsyncSession | ISessionAdapter):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=Position,
            model_class=PositionModel,
        )

    async def get_active_positions(self) -> list[Position]:
        """投票受付中の役職をdisplay_order昇順で取得."""
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_columns}
                FROM positions
                WHERE is_active = :is_active
                ORDER BY {self._order_by}
                """,
                {"is_active": True},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting active positions: {e}")
            raise DatabaseError(
                "Failed to get active positions", {"error": str(e)}
            ) from e

    async def create(self, entity: Position) -> Position:
        """Create a new position."""
        try:
            created = await self._execute_returning(
                f"""
                INSERT INTO positions (id, title, description, display_order, is_active)
                VALUES (:id, :title, :description, :display_order, :is_active)
                RETURNING {self._select_columns}
                """,
                {**self._to_params(entity), "id": entity.id or new_id()},
            )
            if created is None:
                raise DatabaseError("Failed to create position", {"entity": str(entity)})
            return created
        except SQLAlchemyError as e:
            logger.error(f"Database error creating position: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to create position",
                {"entity": str(entity), "error": str(e)},
            ) from e

    async def update(self, entity: Position) -> Position:
        """Update an existing position."""
        if not entity.id:
            raise ValueError("Entity must have an ID to update")
        try:
            updated = await self._execute_returning(
                f"""
                UPDATE positions
                SET title = :title,
                    description = :description,
                    display_order = :display_order,
                    is_active = :is_active
                WHERE id = :id
                RETURNING {self._select_columns}
                """,
                {**self._to_params(entity), "id": entity.id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error updating position: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to update position",
                {"entity": str(entity), "error": str(e)},
            ) from e
        if updated is None:
            raise UpdateError(f"Position with ID {entity.id} not found")
        return updated

    def _to_params(self, entity: Position) -> dict[str, Any]:
        return {
            "title": entity.title,
            "description": entity.description,
            "display_order": entity.display_order,
            "is_active": entity.active,
        }

    def _to_entity(self, model: PositionModel) -> Position:
        """Convert database model to domain entity."""
        return Position(
            id=model.id,
            title=model.title,
            description=model.description,
            display_order=model.display_order,
            active=model.is_active,
        )
