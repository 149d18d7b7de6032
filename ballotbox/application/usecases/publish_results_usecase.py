"""開票結果公開のユースケース."""

from __future__ import annotations

from ballotbox.application.dtos.results_dto import (
    PublishResultsInputDto,
    PublishResultsOutputDto,
)
from ballotbox.common.logging import get_logger
from ballotbox.domain.entities import PublicationRecord
from ballotbox.domain.repositories.publication_record_repository import (
    PublicationRecordRepository,
)


logger = get_logger(__name__)


class PublishResultsUseCase:
    """役職ごとの開票結果を公開するユースケース.

    管理者権限の確認は呼び出し側（インターフェース層）の責務で、
    このクラスでは行わない。
    """

    def __init__(
        self, publication_record_repository: PublicationRecordRepository
    ) -> None:
        """ユースケースを初期化する.

        Args:
            publication_record_repository: 公開記録リポジトリインスタンス
        """
        self.publication_record_repository = publication_record_repository

    async def publish_results(
        self, input_dto: PublishResultsInputDto
    ) -> PublishResultsOutputDto:
        """開票結果を公開する.

        既に公開済みなら何もせず成功を返す（公開記録は1役職1件）。
        """
        try:
            created = await self.publication_record_repository.create_if_absent(
                PublicationRecord(
                    position_id=input_dto.position_id,
                    published_by=input_dto.published_by,
                )
            )
        except Exception as e:
            logger.error(f"Failed to publish results: {e}")
            return PublishResultsOutputDto(success=False, error_message=str(e))

        if created:
            logger.info(
                "Results published",
                position_id=input_dto.position_id,
                published_by=input_dto.published_by,
            )
        return PublishResultsOutputDto(success=True, already_published=not created)

    async def is_published(self, position_id: str) -> bool:
        """役職の開票結果が公開済みかどうか."""
        record = await self.publication_record_repository.get_by_position_id(
            position_id
        )
        return record is not None
