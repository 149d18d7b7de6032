"""役職管理のユースケース."""

from __future__ import annotations

from ballotbox.application.dtos.ballot_dto import (
    ListPositionsOutputDto,
    PositionOutputItem,
)
from ballotbox.application.dtos.position_dto import (
    CreatePositionInputDto,
    CreatePositionOutputDto,
    DeletePositionOutputDto,
    UpdatePositionInputDto,
    UpdatePositionOutputDto,
)
from ballotbox.common.logging import get_logger
from ballotbox.domain.entities import Position
from ballotbox.domain.repositories.position_repository import PositionRepository


logger = get_logger(__name__)


class ManagePositionsUseCase:
    """役職管理のユースケース（管理者用）."""

    def __init__(self, position_repository: PositionRepository) -> None:
        """ユースケースを初期化する.

        Args:
            position_repository: 役職リポジトリインスタンス
        """
        self.position_repository = position_repository

    async def list_positions(self) -> ListPositionsOutputDto:
        """全役職をdisplay_order昇順で取得する."""
        try:
            positions = await self.position_repository.get_all()
            return ListPositionsOutputDto(
                positions=[
                    PositionOutputItem.from_entity(p)
                    for p in sorted(positions, key=lambda p: p.display_order)
                ]
            )
        except Exception as e:
            logger.error(f"Failed to list positions: {e}")
            return ListPositionsOutputDto(
                positions=[], success=False, error_message=str(e)
            )

    async def create_position(
        self, input_dto: CreatePositionInputDto
    ) -> CreatePositionOutputDto:
        """役職を作成する.

        表示順を省略した場合は末尾（現在の役職数）に追加する。
        """
        if not input_dto.title.strip():
            return CreatePositionOutputDto(
                success=False, error_message="役職名を入力してください。"
            )

        try:
            display_order = input_dto.display_order
            if display_order is None:
                display_order = await self.position_repository.count()

            created = await self.position_repository.create(
                Position(
                    title=input_dto.title.strip(),
                    description=input_dto.description,
                    display_order=display_order,
                    active=input_dto.active,
                )
            )
            return CreatePositionOutputDto(success=True, position_id=created.id)
        except Exception as e:
            logger.error(f"Failed to create position: {e}")
            return CreatePositionOutputDto(success=False, error_message=str(e))

    async def update_position(
        self, input_dto: UpdatePositionInputDto
    ) -> UpdatePositionOutputDto:
        """役職を更新する."""
        try:
            existing = await self.position_repository.get_by_id(input_dto.id)
            if not existing:
                return UpdatePositionOutputDto(
                    success=False, error_message="役職が見つかりません。"
                )

            await self.position_repository.update(
                Position(
                    id=input_dto.id,
                    title=input_dto.title,
                    description=input_dto.description,
                    display_order=input_dto.display_order,
                    active=input_dto.active,
                )
            )
            return UpdatePositionOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to update position: {e}")
            return UpdatePositionOutputDto(success=False, error_message=str(e))

    async def delete_position(self, position_id: str) -> DeletePositionOutputDto:
        """役職を削除する.

        候補者や投票の扱いはバックエンドの参照整合性に任せる。
        """
        try:
            existing = await self.position_repository.get_by_id(position_id)
            if not existing:
                return DeletePositionOutputDto(
                    success=False, error_message="役職が見つかりません。"
                )

            if await self.position_repository.delete(position_id):
                return DeletePositionOutputDto(success=True)
            return DeletePositionOutputDto(
                success=False, error_message="削除できませんでした。"
            )
        except Exception as e:
            logger.error(f"Failed to delete position: {e}")
            return DeletePositionOutputDto(success=False, error_message=str(e))
