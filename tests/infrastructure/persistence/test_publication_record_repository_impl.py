"""Tests for PublicationRecordRepositoryImpl."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.publication_record import PublicationRecord
from ballotbox.infrastructure.persistence.publication_record_repository_impl import (
    PublicationRecordRepositoryImpl,
)


class TestPublicationRecordRepositoryImpl:
    """Test cases for PublicationRecordRepositoryImpl."""

    @pytest.fixture
    def mock_session(self) -> MagicMock:
        session = MagicMock(spec=AsyncSession)
        session.execute = AsyncMock()
        session.commit = AsyncMock()
        session.rollback = AsyncMock()
        return session

    @pytest.fixture
    def repository(self, mock_session: MagicMock) -> PublicationRecordRepositoryImpl:
        return PublicationRecordRepositoryImpl(mock_session)

    @pytest.mark.asyncio
    async def test_create_if_absent_inserts(
        self,
        repository: PublicationRecordRepositoryImpl,
        mock_session: MagicMock,
    ) -> None:
        row = MagicMock()
        row._asdict.return_value = {
            "id": "r1",
            "position_id": "p1",
            "published_by": "admin-1",
            "published_at": None,
        }
        mock_result = MagicMock()
        mock_result.first.return_value = row
        mock_session.execute.return_value = mock_result

        created = await repository.create_if_absent(
            PublicationRecord(position_id="p1", published_by="admin-1")
        )

        assert created is True
        sql = str(mock_session.execute.call_args.args[0])
        assert "ON CONFLICT (position_id) DO NOTHING" in sql

    @pytest.mark.asyncio
    async def test_create_if_absent_existing_record(
        self,
        repository: PublicationRecordRepositoryImpl,
        mock_session: MagicMock,
    ) -> None:
        mock_result = MagicMock()
        mock_result.first.return_value = None
        mock_session.execute.return_value = mock_result

        created = await repository.create_if_absent(PublicationRecord(position_id="p1"))

        assert created is False

    @pytest.mark.asyncio
    async def test_get_published_position_ids(
        self,
        repository: PublicationRecordRepositoryImpl,
        mock_session: MagicMock,
    ) -> None:
        mock_result = MagicMock()
        mock_result.fetchall.return_value = [("p1",), ("p3",)]
        mock_session.execute.return_value = mock_result

        assert await repository.get_published_position_ids() == {"p1", "p3"}
