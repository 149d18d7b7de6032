"""RoleAssignment repository implementation using SQLAlchemy."""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.repositories.role_assignment_repository import (
    RoleAssignmentRepository,
)
from ballotbox.domain.repositories.session_adapter import ISessionAdapter
from ballotbox.infrastructure.exceptions import DatabaseError


logger = logging.getLogger(__name__)


class RoleAssignmentRepositoryImpl(RoleAssignmentRepository):
    """user_rolesテーブルからロール割当を読み出す."""

    def __init__(self, session: AsyncSession | ISessionAdapter):
        self.session = session

    async def get_roles_for_user(self, user_id: str) -> list[str]:
        """ユーザーのロール名を割当順で返す."""
        try:
            result = await self.session.execute(
                text(
                    """
                    SELECT role
                    FROM user_roles
                    WHERE user_id = :user_id
                    ORDER BY created_at ASC, id ASC
                    """
                ),
                {"user_id": user_id},
            )
            return [str(row[0]) for row in result.fetchall()]
        except SQLAlchemyError as e:
            logger.error(f"Database error getting roles for user: {e}")
            raise DatabaseError(
                "Failed to get roles for user",
                {"user_id": user_id, "error": str(e)},
            ) from e
