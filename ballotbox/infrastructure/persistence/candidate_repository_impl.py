"""Candidate repository implementation using SQLAlchemy."""

import logging

from datetime import datetime
from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.candidate import Candidate
from ballotbox.domain.repositories.candidate_repository import CandidateRepository
from ballotbox.domain.repositories.session_adapter import ISessionAdapter
from ballotbox.infrastructure.exceptions import DatabaseError, UpdateError
from ballotbox.infrastructure.persistence.base_repository_impl import (
    BaseRepositoryImpl,
    new_id,
)


logger = logging.getLogger(__name__)


class CandidateModel(PydanticBaseModel):
    """Candidate database model."""

    id: str
    position_id: str
    name: str
    manifesto: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None


class CandidateRepositoryImpl(BaseRepositoryImpl[Candidate], CandidateRepository):
    """Candidate repository implementation using SQLAlchemy."""

    _table_name = "candidates"
    _columns = ("id", "position_id", "name", "manifesto", "image_url", "created_at")
    _order_by = "created_at ASC, id ASC"

    def __init__(self, session: AsyncSession | ISessionAdapter):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=Candidate,
            model_class=CandidateModel,
        )

    async def get_by_position_id(self, position_id: str) -> list[Candidate]:
        """役職に属する候補者を登録順で取得."""
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_columns}
                FROM candidates
                WHERE position_id = :position_id
                ORDER BY {self._order_by}
                """,
                {"position_id": position_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting candidates by position: {e}")
            raise DatabaseError(
                "Failed to get candidates by position",
                {"position_id": position_id, "error": str(e)},
            ) from e

    async def create(self, entity: Candidate) -> Candidate:
        """Create a new candidate."""
        try:
            created = await self._execute_returning(
                f"""
                INSERT INTO candidates (id, position_id, name, manifesto, image_url)
                VALUES (:id, :position_id, :name, :manifesto, :image_url)
                RETURNING {self._select_columns}
                """,
                {
                    **self._to_params(entity),
                    "id": entity.id or new_id(),
                    "position_id": entity.position_id,
                },
            )
            if created is None:
                raise DatabaseError(
                    "Failed to create candidate", {"entity": str(entity)}
                )
            return created
        except SQLAlchemyError as e:
            logger.error(f"Database error creating candidate: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to create candidate",
                {"entity": str(entity), "error": str(e)},
            ) from e

    async def update(self, entity: Candidate) -> Candidate:
        """Update an existing candidate.

        position_idは更新しない。
        """
        if not entity.id:
            raise ValueError("Entity must have an ID to update")
        try:
            updated = await self._execute_returning(
                f"""
                UPDATE candidates
                SET name = :name,
                    manifesto = :manifesto,
                    image_url = :image_url
                WHERE id = :id
                RETURNING {self._select_columns}
                """,
                {**self._to_params(entity), "id": entity.id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error updating candidate: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to update candidate",
                {"entity": str(entity), "error": str(e)},
            ) from e
        if updated is None:
            raise UpdateError(f"Candidate with ID {entity.id} not found")
        return updated

    def _to_params(self, entity: Candidate) -> dict[str, Any]:
        return {
            "name": entity.name,
            "manifesto": entity.manifesto,
            "image_url": entity.image_ref,
        }

    def _to_entity(self, model: CandidateModel) -> Candidate:
        """Convert database model to domain entity."""
        return Candidate(
            id=model.id,
            position_id=model.position_id,
            name=model.name,
            manifesto=model.manifesto,
            image_ref=model.image_url,
        )
