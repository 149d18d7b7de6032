"""Tests for ManagePositionsUseCase."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ballotbox.application.dtos.position_dto import (
    CreatePositionInputDto,
    UpdatePositionInputDto,
)
from ballotbox.application.usecases.manage_positions_usecase import (
    ManagePositionsUseCase,
)
from ballotbox.domain.entities import Position
from ballotbox.domain.repositories.position_repository import PositionRepository


class TestManagePositionsUseCase:
    """Test cases for ManagePositionsUseCase."""

    @pytest.fixture
    def mock_position_repository(self) -> MagicMock:
        """Create mock position repository."""
        repo = MagicMock(spec=PositionRepository)
        repo.get_all = AsyncMock()
        repo.get_by_id = AsyncMock()
        repo.create = AsyncMock()
        repo.update = AsyncMock()
        repo.delete = AsyncMock()
        repo.count = AsyncMock(return_value=2)
        return repo

    @pytest.fixture
    def use_case(self, mock_position_repository: MagicMock) -> ManagePositionsUseCase:
        return ManagePositionsUseCase(mock_position_repository)

    @pytest.mark.asyncio
    async def test_list_positions_ordered(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        mock_position_repository.get_all.return_value = [
            Position(id="p2", title="副会長", display_order=5),
            Position(id="p1", title="会長", display_order=1, active=False),
        ]

        result = await use_case.list_positions()

        assert result.success is True
        assert [p.id for p in result.positions] == ["p1", "p2"]
        assert result.positions[0].active is False

    @pytest.mark.asyncio
    async def test_create_position_appends_by_default(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        mock_position_repository.create.return_value = Position(id="p3", title="書記")

        result = await use_case.create_position(CreatePositionInputDto(title=" 書記 "))

        assert result.success is True
        assert result.position_id == "p3"
        created = mock_position_repository.create.call_args.args[0]
        assert created.title == "書記"
        assert created.display_order == 2

    @pytest.mark.asyncio
    async def test_create_position_with_explicit_order(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        mock_position_repository.create.return_value = Position(id="p3", title="書記")

        await use_case.create_position(
            CreatePositionInputDto(title="書記", display_order=0, active=False)
        )

        created = mock_position_repository.create.call_args.args[0]
        assert created.display_order == 0
        assert created.active is False
        mock_position_repository.count.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_position_requires_title(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        result = await use_case.create_position(CreatePositionInputDto(title="  "))

        assert result.success is False
        mock_position_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_position(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        mock_position_repository.get_by_id.return_value = Position(id="p1", title="会長")

        result = await use_case.update_position(
            UpdatePositionInputDto(id="p1", title="生徒会長", display_order=3, active=False)
        )

        assert result.success is True
        updated = mock_position_repository.update.call_args.args[0]
        assert (updated.id, updated.title, updated.display_order, updated.active) == (
            "p1",
            "生徒会長",
            3,
            False,
        )

    @pytest.mark.asyncio
    async def test_update_missing_position(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        mock_position_repository.get_by_id.return_value = None

        result = await use_case.update_position(UpdatePositionInputDto(id="x", title="t"))

        assert result.success is False
        mock_position_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_position(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        mock_position_repository.get_by_id.return_value = Position(id="p1", title="会長")
        mock_position_repository.delete.return_value = True

        result = await use_case.delete_position("p1")

        assert result.success is True
        mock_position_repository.delete.assert_awaited_once_with("p1")

    @pytest.mark.asyncio
    async def test_delete_error(
        self,
        use_case: ManagePositionsUseCase,
        mock_position_repository: MagicMock,
    ) -> None:
        mock_position_repository.get_by_id.return_value = Position(id="p1", title="会長")
        mock_position_repository.delete.side_effect = Exception("DB error")

        result = await use_case.delete_position("p1")

        assert result.success is False
        assert result.error_message == "DB error"
