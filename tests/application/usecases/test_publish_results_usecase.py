"""Tests for PublishResultsUseCase."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ballotbox.application.dtos.results_dto import PublishResultsInputDto
from ballotbox.application.usecases.publish_results_usecase import (
    PublishResultsUseCase,
)
from ballotbox.domain.entities import PublicationRecord
from ballotbox.domain.repositories.publication_record_repository import (
    PublicationRecordRepository,
)


class TestPublishResultsUseCase:
    """Test cases for PublishResultsUseCase."""

    @pytest.fixture
    def mock_publication_repository(self) -> MagicMock:
        repo = MagicMock(spec=PublicationRecordRepository)
        repo.create_if_absent = AsyncMock(return_value=True)
        repo.get_by_position_id = AsyncMock(return_value=None)
        return repo

    @pytest.fixture
    def use_case(self, mock_publication_repository: MagicMock) -> PublishResultsUseCase:
        return PublishResultsUseCase(mock_publication_repository)

    @pytest.mark.asyncio
    async def test_publish_creates_record(
        self,
        use_case: PublishResultsUseCase,
        mock_publication_repository: MagicMock,
    ) -> None:
        result = await use_case.publish_results(
            PublishResultsInputDto(position_id="p1", published_by="admin-1")
        )

        assert result.success is True
        assert result.already_published is False
        record = mock_publication_repository.create_if_absent.call_args.args[0]
        assert record.position_id == "p1"
        assert record.published_by == "admin-1"

    @pytest.mark.asyncio
    async def test_publish_twice_is_success_without_new_record(
        self,
        use_case: PublishResultsUseCase,
        mock_publication_repository: MagicMock,
    ) -> None:
        mock_publication_repository.create_if_absent.return_value = False

        result = await use_case.publish_results(
            PublishResultsInputDto(position_id="p1", published_by="admin-1")
        )

        assert result.success is True
        assert result.already_published is True

    @pytest.mark.asyncio
    async def test_publish_error(
        self,
        use_case: PublishResultsUseCase,
        mock_publication_repository: MagicMock,
    ) -> None:
        mock_publication_repository.create_if_absent.side_effect = Exception("DB error")

        result = await use_case.publish_results(
            PublishResultsInputDto(position_id="p1", published_by="admin-1")
        )

        assert result.success is False
        assert result.error_message == "DB error"

    @pytest.mark.asyncio
    async def test_is_published(
        self,
        use_case: PublishResultsUseCase,
        mock_publication_repository: MagicMock,
    ) -> None:
        assert await use_case.is_published("p1") is False

        mock_publication_repository.get_by_position_id.return_value = (
            PublicationRecord(id="r1", position_id="p1")
        )

        assert await use_case.is_published("p1") is True
