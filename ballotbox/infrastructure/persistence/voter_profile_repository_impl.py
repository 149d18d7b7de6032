"""VoterProfile repository implementation using SQLAlchemy."""

import logging

from datetime import datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.voter_profile import VoterProfile
from ballotbox.domain.repositories.session_adapter import ISessionAdapter
from ballotbox.domain.repositories.voter_profile_repository import (
    VoterProfileRepository,
)
from ballotbox.infrastructure.exceptions import DatabaseError
from ballotbox.infrastructure.persistence.base_repository_impl import (
    BaseRepositoryImpl,
    new_id,
)


logger = logging.getLogger(__name__)


class VoterProfileModel(PydanticBaseModel):
    """VoterProfile database model."""

    id: str
    user_id: str
    email: str
    name: str
    department: str | None = None
    registration_number: str | None = None
    phone_number: str | None = None
    created_at: datetime | None = None


class VoterProfileRepositoryImpl(
    BaseRepositoryImpl[VoterProfile], VoterProfileRepository
):
    """VoterProfile repository implementation using SQLAlchemy."""

    _table_name = "profiles"
    _columns = (
        "id",
        "user_id",
        "email",
        "name",
        "department",
        "registration_number",
        "phone_number",
        "created_at",
    )
    _order_by = "created_at ASC, id ASC"

    def __init__(self, session: AsyncSession | ISessionAdapter):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=VoterProfile,
            model_class=VoterProfileModel,
        )

    async def create(self, profile: VoterProfile) -> VoterProfile:
        """プロフィールを作成する."""
        try:
            created = await self._execute_returning(
                f"""
                INSERT INTO profiles (
                    id, user_id, email, name,
                    department, registration_number, phone_number
                )
                VALUES (
                    :id, :user_id, :email, :name,
                    :department, :registration_number, :phone_number
                )
                RETURNING {self._select_columns}
                """,
                {
                    "id": profile.id or new_id(),
                    "user_id": profile.user_id,
                    "email": profile.email,
                    "name": profile.name,
                    "department": profile.department,
                    "registration_number": profile.registration_number,
                    "phone_number": profile.phone_number,
                },
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error creating profile: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to create voter profile",
                {"user_id": profile.user_id, "error": str(e)},
            ) from e
        if created is None:
            raise DatabaseError(
                "Failed to create voter profile", {"user_id": profile.user_id}
            )
        return created

    async def get_by_user_id(self, user_id: str) -> VoterProfile | None:
        """ユーザーIDでプロフィールを取得."""
        try:
            profiles = await self._fetch_all(
                f"""
                SELECT {self._select_columns}
                FROM profiles
                WHERE user_id = :user_id
                """,
                {"user_id": user_id},
            )
            return profiles[0] if profiles else None
        except SQLAlchemyError as e:
            logger.error(f"Database error getting profile by user: {e}")
            raise DatabaseError(
                "Failed to get voter profile",
                {"user_id": user_id, "error": str(e)},
            ) from e

    def _to_entity(self, model: VoterProfileModel) -> VoterProfile:
        """Convert database model to domain entity."""
        return VoterProfile(
            id=model.id,
            user_id=model.user_id,
            email=model.email,
            name=model.name,
            department=model.department,
            registration_number=model.registration_number,
            phone_number=model.phone_number,
        )
