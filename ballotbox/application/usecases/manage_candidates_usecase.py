"""候補者管理のユースケース."""

from __future__ import annotations

from ballotbox.application.dtos.ballot_dto import (
    CandidateOutputItem,
    ListCandidatesOutputDto,
)
from ballotbox.application.dtos.candidate_dto import (
    CreateCandidateInputDto,
    CreateCandidateOutputDto,
    DeleteCandidateOutputDto,
    UpdateCandidateInputDto,
    UpdateCandidateOutputDto,
)
from ballotbox.common.logging import get_logger
from ballotbox.domain.entities import Candidate
from ballotbox.domain.repositories.candidate_repository import CandidateRepository
from ballotbox.domain.repositories.position_repository import PositionRepository


logger = get_logger(__name__)


class ManageCandidatesUseCase:
    """候補者管理のユースケース（管理者用）."""

    def __init__(
        self,
        candidate_repository: CandidateRepository,
        position_repository: PositionRepository,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            candidate_repository: 候補者リポジトリインスタンス
            position_repository: 役職リポジトリインスタンス
        """
        self.candidate_repository = candidate_repository
        self.position_repository = position_repository

    async def list_candidates(
        self, position_id: str | None = None
    ) -> ListCandidatesOutputDto:
        """候補者一覧を取得する。position_idを指定するとその役職に絞り込む."""
        try:
            if position_id is not None:
                candidates = await self.candidate_repository.get_by_position_id(
                    position_id
                )
            else:
                candidates = await self.candidate_repository.get_all()
            return ListCandidatesOutputDto(
                candidates=[CandidateOutputItem.from_entity(c) for c in candidates]
            )
        except Exception as e:
            logger.error(f"Failed to list candidates: {e}")
            return ListCandidatesOutputDto(
                candidates=[], success=False, error_message=str(e)
            )

    async def create_candidate(
        self, input_dto: CreateCandidateInputDto
    ) -> CreateCandidateOutputDto:
        """候補者を作成する."""
        if not input_dto.name.strip():
            return CreateCandidateOutputDto(
                success=False, error_message="候補者名を入力してください。"
            )

        try:
            position = await self.position_repository.get_by_id(input_dto.position_id)
            if not position:
                return CreateCandidateOutputDto(
                    success=False, error_message="役職が見つかりません。"
                )

            created = await self.candidate_repository.create(
                Candidate(
                    position_id=input_dto.position_id,
                    name=input_dto.name.strip(),
                    manifesto=input_dto.manifesto,
                    image_ref=input_dto.image_ref,
                )
            )
            return CreateCandidateOutputDto(success=True, candidate_id=created.id)
        except Exception as e:
            logger.error(f"Failed to create candidate: {e}")
            return CreateCandidateOutputDto(success=False, error_message=str(e))

    async def update_candidate(
        self, input_dto: UpdateCandidateInputDto
    ) -> UpdateCandidateOutputDto:
        """候補者を更新する。所属役職は変更しない."""
        try:
            existing = await self.candidate_repository.get_by_id(input_dto.id)
            if not existing:
                return UpdateCandidateOutputDto(
                    success=False, error_message="候補者が見つかりません。"
                )

            await self.candidate_repository.update(
                Candidate(
                    id=input_dto.id,
                    position_id=existing.position_id,
                    name=input_dto.name,
                    manifesto=input_dto.manifesto,
                    image_ref=input_dto.image_ref,
                )
            )
            return UpdateCandidateOutputDto(success=True)
        except Exception as e:
            logger.error(f"Failed to update candidate: {e}")
            return UpdateCandidateOutputDto(success=False, error_message=str(e))

    async def delete_candidate(self, candidate_id: str) -> DeleteCandidateOutputDto:
        """候補者を削除する."""
        try:
            existing = await self.candidate_repository.get_by_id(candidate_id)
            if not existing:
                return DeleteCandidateOutputDto(
                    success=False, error_message="候補者が見つかりません。"
                )

            if await self.candidate_repository.delete(candidate_id):
                return DeleteCandidateOutputDto(success=True)
            return DeleteCandidateOutputDto(
                success=False, error_message="削除できませんでした。"
            )
        except Exception as e:
            logger.error(f"Failed to delete candidate: {e}")
            return DeleteCandidateOutputDto(success=False, error_message=str(e))
