"""Tests for PositionRepositoryImpl."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from ballotbox.domain.entities.position import Position
from ballotbox.infrastructure.exceptions import DatabaseError, UpdateError
from ballotbox.infrastructure.persistence.position_repository_impl import (
    PositionRepositoryImpl,
)


def position_row(**overrides: object) -> MagicMock:
    values = {
        "id": "p1",
        "title": "会長",
        "description": None,
        "display_order": 1,
        "is_active": True,
        "created_at": None,
    }
    values.update(overrides)
    row = MagicMock()
    row._asdict.return_value = values
    return row


class TestPositionRepositoryImpl:
    """Test cases for PositionRepositoryImpl."""

    @pytest.fixture
    def mock_session(self) -> MagicMock:
        session = MagicMock(spec=AsyncSession)
        session.execute = AsyncMock()
        session.commit = AsyncMock()
        session.rollback = AsyncMock()
        return session

    @pytest.fixture
    def repository(self, mock_session: MagicMock) -> PositionRepositoryImpl:
        return PositionRepositoryImpl(mock_session)

    @pytest.mark.asyncio
    async def test_get_by_id(
        self, repository: PositionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.first.return_value = position_row(is_active=0)
        mock_session.execute.return_value = mock_result

        position = await repository.get_by_id("p1")

        assert position is not None
        assert position.title == "会長"
        assert position.active is False

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(
        self, repository: PositionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.first.return_value = None
        mock_session.execute.return_value = mock_result

        assert await repository.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_get_active_positions(
        self, repository: PositionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.fetchall.return_value = [
            position_row(),
            position_row(id="p2", title="副会長", display_order=2),
        ]
        mock_session.execute.return_value = mock_result

        positions = await repository.get_active_positions()

        assert [p.id for p in positions] == ["p1", "p2"]
        assert mock_session.execute.call_args.args[1] == {"is_active": True}

    @pytest.mark.asyncio
    async def test_get_all_with_pagination(
        self, repository: PositionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.fetchall.return_value = []
        mock_session.execute.return_value = mock_result

        await repository.get_all(limit=10, offset=20)

        sql = str(mock_session.execute.call_args.args[0])
        assert "LIMIT :limit OFFSET :offset" in sql
        assert mock_session.execute.call_args.args[1] == {"limit": 10, "offset": 20}

    @pytest.mark.asyncio
    async def test_update_missing_raises(
        self, repository: PositionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.first.return_value = None
        mock_session.execute.return_value = mock_result

        with pytest.raises(UpdateError):
            await repository.update(Position(id="p404", title="x"))

    @pytest.mark.asyncio
    async def test_update_requires_id(self, repository: PositionRepositoryImpl) -> None:
        with pytest.raises(ValueError):
            await repository.update(Position(title="x"))

    @pytest.mark.asyncio
    async def test_delete(
        self, repository: PositionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_result = MagicMock()
        mock_result.rowcount = 1
        mock_session.execute.return_value = mock_result

        assert await repository.delete("p1") is True
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_count_error(
        self, repository: PositionRepositoryImpl, mock_session: MagicMock
    ) -> None:
        mock_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("timeout")
        )

        with pytest.raises(DatabaseError):
            await repository.count()
