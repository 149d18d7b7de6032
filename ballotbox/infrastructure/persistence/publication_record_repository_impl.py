"""PublicationRecord repository implementation using SQLAlchemy."""

import logging

from datetime import datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.publication_record import PublicationRecord
from ballotbox.domain.repositories.publication_record_repository import (
    PublicationRecordRepository,
)
from ballotbox.domain.repositories.session_adapter import ISessionAdapter
from ballotbox.infrastructure.exceptions import DatabaseError
from ballotbox.infrastructure.persistence.base_repository_impl import (
    BaseRepositoryImpl,
    new_id,
)


logger = logging.getLogger(__name__)


class PublicationRecordModel(PydanticBaseModel):
    """PublicationRecord database model."""

    id: str
    position_id: str
    published_by: str | None = None
    published_at: datetime | None = None


class PublicationRecordRepositoryImpl(
    BaseRepositoryImpl[PublicationRecord], PublicationRecordRepository
):
    """PublicationRecord repository implementation using SQLAlchemy."""

    _table_name = "results_published"
    _columns = ("id", "position_id", "published_by", "published_at")
    _order_by = "published_at ASC, id ASC"

    def __init__(self, session: AsyncSession | ISessionAdapter):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=PublicationRecord,
            model_class=PublicationRecordModel,
        )

    async def create_if_absent(self, record: PublicationRecord) -> bool:
        """公開記録が無ければ作成する.

        position_idの一意制約に対する ON CONFLICT DO NOTHING で、
        同時に公開しても記録は1件に収束する。
        """
        try:
            created = await self._execute_returning(
                f"""
                INSERT INTO results_published (id, position_id, published_by)
                VALUES (:id, :position_id, :published_by)
                ON CONFLICT (position_id) DO NOTHING
                RETURNING {self._select_columns}
                """,
                {
                    "id": record.id or new_id(),
                    "position_id": record.position_id,
                    "published_by": record.published_by,
                },
            )
            return created is not None
        except SQLAlchemyError as e:
            logger.error(f"Database error publishing results: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to create publication record",
                {"position_id": record.position_id, "error": str(e)},
            ) from e

    async def get_by_position_id(self, position_id: str) -> PublicationRecord | None:
        """役職の公開記録を取得."""
        try:
            records = await self._fetch_all(
                f"""
                SELECT {self._select_columns}
                FROM results_published
                WHERE position_id = :position_id
                """,
                {"position_id": position_id},
            )
            return records[0] if records else None
        except SQLAlchemyError as e:
            logger.error(f"Database error getting publication record: {e}")
            raise DatabaseError(
                "Failed to get publication record",
                {"position_id": position_id, "error": str(e)},
            ) from e

    async def get_published_position_ids(self) -> set[str]:
        """公開済みの役職IDを全て取得."""
        try:
            result = await self.session.execute(
                text("SELECT position_id FROM results_published")
            )
            return {str(row[0]) for row in result.fetchall()}
        except SQLAlchemyError as e:
            logger.error(f"Database error getting published positions: {e}")
            raise DatabaseError(
                "Failed to get published positions", {"error": str(e)}
            ) from e

    def _to_entity(self, model: PublicationRecordModel) -> PublicationRecord:
        """Convert database model to domain entity."""
        return PublicationRecord(
            id=model.id,
            position_id=model.position_id,
            published_by=model.published_by,
            published_at=model.published_at,
        )
