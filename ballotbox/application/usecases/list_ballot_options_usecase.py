"""投票画面の選択肢を取得するユースケース."""

from __future__ import annotations

from ballotbox.application.dtos.ballot_dto import (
    BallotSheetItem,
    BallotSheetOutputDto,
    CandidateOutputItem,
    ListCandidatesOutputDto,
    ListPositionsOutputDto,
    PositionOutputItem,
)
from ballotbox.common.logging import get_logger
from ballotbox.domain.repositories.ballot_repository import BallotRepository
from ballotbox.domain.repositories.candidate_repository import CandidateRepository
from ballotbox.domain.repositories.position_repository import PositionRepository


logger = get_logger(__name__)


class ListBallotOptionsUseCase:
    """受付中の役職と候補者を取得するユースケース（読み取り専用）."""

    def __init__(
        self,
        position_repository: PositionRepository,
        candidate_repository: CandidateRepository,
        ballot_repository: BallotRepository,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            position_repository: 役職リポジトリインスタンス
            candidate_repository: 候補者リポジトリインスタンス
            ballot_repository: 投票リポジトリインスタンス
        """
        self.position_repository = position_repository
        self.candidate_repository = candidate_repository
        self.ballot_repository = ballot_repository

    async def list_open_positions(self) -> ListPositionsOutputDto:
        """受付中の役職をdisplay_order昇順で取得する."""
        try:
            positions = await self.position_repository.get_active_positions()
            ordered = sorted(positions, key=lambda p: p.display_order)
            return ListPositionsOutputDto(
                positions=[PositionOutputItem.from_entity(p) for p in ordered]
            )
        except Exception as e:
            logger.error(f"Failed to list open positions: {e}")
            return ListPositionsOutputDto(
                positions=[], success=False, error_message=str(e)
            )

    async def list_candidates(self, position_id: str) -> ListCandidatesOutputDto:
        """役職の候補者を取得する.

        候補者のいない役職は空のリストを返す（エラーにはしない）。
        """
        try:
            candidates = await self.candidate_repository.get_by_position_id(
                position_id
            )
            return ListCandidatesOutputDto(
                candidates=[CandidateOutputItem.from_entity(c) for c in candidates]
            )
        except Exception as e:
            logger.error(f"Failed to list candidates: {e}")
            return ListCandidatesOutputDto(
                candidates=[], success=False, error_message=str(e)
            )

    async def get_ballot_sheet(self, voter_id: str) -> BallotSheetOutputDto:
        """投票者の投票用紙（役職ごとの候補者と投票状況）を取得する."""
        try:
            positions = sorted(
                await self.position_repository.get_active_positions(),
                key=lambda p: p.display_order,
            )
            ballots = await self.ballot_repository.get_by_voter_id(voter_id)
            voted = {b.position_id: b.candidate_id for b in ballots}

            items: list[BallotSheetItem] = []
            for position in positions:
                candidates = await self.candidate_repository.get_by_position_id(
                    position.id or ""
                )
                items.append(
                    BallotSheetItem(
                        position=PositionOutputItem.from_entity(position),
                        candidates=[
                            CandidateOutputItem.from_entity(c) for c in candidates
                        ],
                        has_voted=position.id in voted,
                        voted_candidate_id=voted.get(position.id or ""),
                    )
                )
            return BallotSheetOutputDto(items=items)
        except Exception as e:
            logger.error(f"Failed to build ballot sheet: {e}")
            return BallotSheetOutputDto(success=False, error_message=str(e))
