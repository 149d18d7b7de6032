"""Ballot repository implementation using SQLAlchemy."""

import logging

from datetime import datetime

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.ballot import Ballot
from ballotbox.domain.exceptions import DuplicateVoteError
from ballotbox.domain.repositories.ballot_repository import BallotRepository
from ballotbox.domain.repositories.session_adapter import ISessionAdapter
from ballotbox.infrastructure.exceptions import DatabaseError
from ballotbox.infrastructure.persistence.base_repository_impl import (
    BaseRepositoryImpl,
    new_id,
    row_to_dict,
)


logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: IntegrityError) -> bool:
    """IntegrityErrorが一意制約違反によるものかを判定する.

    asyncpgはsqlstate、psycopg2はpgcodeにSQLSTATEを持つ。
    どちらも無いドライバ（SQLiteなど）はメッセージで判定する。
    """
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return str(code) == UNIQUE_VIOLATION
    message = str(orig).lower()
    return "unique" in message or "duplicate" in message


class BallotModel(PydanticBaseModel):
    """Ballot database model."""

    id: str
    voter_id: str
    position_id: str
    candidate_id: str
    created_at: datetime | None = None


class BallotRepositoryImpl(BaseRepositoryImpl[Ballot], BallotRepository):
    """Ballot repository implementation using SQLAlchemy.

    votesテーブルの UNIQUE (voter_id, position_id) が二重投票防止の本体であり、
    このクラスは一意制約違反を DuplicateVoteError に変換するだけ。
    """

    _table_name = "votes"
    _columns = ("id", "voter_id", "position_id", "candidate_id", "created_at")
    _order_by = "created_at ASC, id ASC"

    def __init__(self, session: AsyncSession | ISessionAdapter):
        """Initialize repository with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(
            session=session,
            entity_class=Ballot,
            model_class=BallotModel,
        )

    async def create(self, ballot: Ballot) -> Ballot:
        """投票を1件登録する."""
        try:
            created = await self._execute_returning(
                f"""
                INSERT INTO votes (id, voter_id, position_id, candidate_id)
                VALUES (:id, :voter_id, :position_id, :candidate_id)
                RETURNING {self._select_columns}
                """,
                {
                    "id": ballot.id or new_id(),
                    "voter_id": ballot.voter_id,
                    "position_id": ballot.position_id,
                    "candidate_id": ballot.candidate_id,
                },
            )
        except IntegrityError as e:
            await self.session.rollback()
            if _is_unique_violation(e):
                raise DuplicateVoteError(ballot.voter_id, ballot.position_id) from e
            logger.error(f"Integrity error creating ballot: {e}")
            raise DatabaseError(
                "Failed to create ballot",
                {"ballot": str(ballot), "error": str(e)},
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating ballot: {e}")
            await self.session.rollback()
            raise DatabaseError(
                "Failed to create ballot",
                {"ballot": str(ballot), "error": str(e)},
            ) from e

        if created is None:
            raise DatabaseError("Failed to create ballot", {"ballot": str(ballot)})
        return created

    async def exists(self, voter_id: str, position_id: str) -> bool:
        """(voter_id, position_id) の投票が存在するか."""
        try:
            result = await self.session.execute(
                text(
                    """
                    SELECT 1 FROM votes
                    WHERE voter_id = :voter_id AND position_id = :position_id
                    LIMIT 1
                    """
                ),
                {"voter_id": voter_id, "position_id": position_id},
            )
            return result.first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Database error checking ballot existence: {e}")
            raise DatabaseError(
                "Failed to check ballot existence",
                {"voter_id": voter_id, "position_id": position_id, "error": str(e)},
            ) from e

    async def get_by_voter_id(self, voter_id: str) -> list[Ballot]:
        """投票者の全投票を取得."""
        try:
            return await self._fetch_all(
                f"""
                SELECT {self._select_columns}
                FROM votes
                WHERE voter_id = :voter_id
                ORDER BY {self._order_by}
                """,
                {"voter_id": voter_id},
            )
        except SQLAlchemyError as e:
            logger.error(f"Database error getting ballots by voter: {e}")
            raise DatabaseError(
                "Failed to get ballots by voter",
                {"voter_id": voter_id, "error": str(e)},
            ) from e

    async def count_by_candidate(self, position_id: str) -> dict[str, int]:
        """役職の投票を候補者IDごとに数える."""
        try:
            result = await self.session.execute(
                text(
                    """
                    SELECT candidate_id, COUNT(*) AS votes
                    FROM votes
                    WHERE position_id = :position_id
                    GROUP BY candidate_id
                    """
                ),
                {"position_id": position_id},
            )
            return {
                str(d["candidate_id"]): int(d["votes"])
                for d in (row_to_dict(r) for r in result.fetchall())
            }
        except SQLAlchemyError as e:
            logger.error(f"Database error counting votes by candidate: {e}")
            raise DatabaseError(
                "Failed to count votes by candidate",
                {"position_id": position_id, "error": str(e)},
            ) from e

    async def count_by_position(self) -> dict[str, int]:
        """役職IDごとの投票数を返す."""
        try:
            result = await self.session.execute(
                text(
                    """
                    SELECT position_id, COUNT(*) AS votes
                    FROM votes
                    GROUP BY position_id
                    """
                )
            )
            return {
                str(d["position_id"]): int(d["votes"])
                for d in (row_to_dict(r) for r in result.fetchall())
            }
        except SQLAlchemyError as e:
            logger.error(f"Database error counting votes by position: {e}")
            raise DatabaseError(
                "Failed to count votes by position", {"error": str(e)}
            ) from e

    def _to_entity(self, model: BallotModel) -> Ballot:
        """Convert database model to domain entity."""
        return Ballot(
            id=model.id,
            voter_id=model.voter_id,
            position_id=model.position_id,
            candidate_id=model.candidate_id,
            created_at=model.created_at,
        )
