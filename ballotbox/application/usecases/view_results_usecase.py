"""開票結果閲覧のユースケース."""

from __future__ import annotations

from collections.abc import Sequence

from ballotbox.application.dtos.ballot_dto import PositionOutputItem
from ballotbox.application.dtos.results_dto import (
    ElectionStatsOutputDto,
    ListResultsOutputDto,
    PositionResultsItem,
    PositionVoteCount,
)
from ballotbox.common.logging import get_logger
from ballotbox.domain.entities import Candidate, Position
from ballotbox.domain.repositories.ballot_repository import BallotRepository
from ballotbox.domain.repositories.candidate_repository import CandidateRepository
from ballotbox.domain.repositories.position_repository import PositionRepository
from ballotbox.domain.repositories.publication_record_repository import (
    PublicationRecordRepository,
)
from ballotbox.domain.repositories.voter_profile_repository import (
    VoterProfileRepository,
)
from ballotbox.domain.services.vote_tally_service import VoteTallyService
from ballotbox.domain.value_objects.role import Role
from ballotbox.domain.value_objects.vote_tally import TallyResult


logger = get_logger(__name__)


class ViewResultsUseCase:
    """開票結果の集計と閲覧を行うユースケース.

    投票者には公開済みの役職だけを、管理者には全役職を見せる。
    """

    def __init__(
        self,
        position_repository: PositionRepository,
        candidate_repository: CandidateRepository,
        ballot_repository: BallotRepository,
        publication_record_repository: PublicationRecordRepository,
        voter_profile_repository: VoterProfileRepository | None = None,
        tally_service: VoteTallyService | None = None,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            position_repository: 役職リポジトリインスタンス
            candidate_repository: 候補者リポジトリインスタンス
            ballot_repository: 投票リポジトリインスタンス
            publication_record_repository: 公開記録リポジトリインスタンス
            voter_profile_repository: 投票者プロフィールリポジトリインスタンス
            tally_service: 集計ドメインサービス
        """
        self.position_repository = position_repository
        self.candidate_repository = candidate_repository
        self.ballot_repository = ballot_repository
        self.publication_record_repository = publication_record_repository
        self.voter_profile_repository = voter_profile_repository
        self.tally_service = tally_service or VoteTallyService()

    async def aggregate_votes(
        self, position_id: str, candidates: Sequence[Candidate]
    ) -> TallyResult:
        """役職の得票数を候補者ごとに集計する.

        得票0の候補者も含め、得票数の降順（同数は候補者の並び順）で返す。
        """
        counts = await self.ballot_repository.count_by_candidate(position_id)
        return self.tally_service.tally(position_id, candidates, counts)

    async def list_visible_results(self, role: Role) -> ListResultsOutputDto:
        """ロールに応じて閲覧可能な開票結果を取得する.

        Args:
            role: 閲覧者のロール

        Returns:
            役職ごとの集計結果
        """
        try:
            published = (
                await self.publication_record_repository.get_published_position_ids()
            )
            if role.is_admin:
                positions = await self.position_repository.get_all()
            else:
                positions = [
                    p
                    for p in await self.position_repository.get_active_positions()
                    if p.id in published
                ]

            results = []
            for position in sorted(positions, key=lambda p: p.display_order):
                results.append(await self._position_results(position, published))
            return ListResultsOutputDto(results=results)
        except Exception as e:
            logger.error(f"Failed to list results: {e}")
            return ListResultsOutputDto(success=False, error_message=str(e))

    async def get_election_stats(self) -> ElectionStatsOutputDto:
        """選挙全体の統計を取得する（管理画面用）."""
        try:
            positions = sorted(
                await self.position_repository.get_all(),
                key=lambda p: p.display_order,
            )
            votes_by_position = await self.ballot_repository.count_by_position()
            total_voters = (
                await self.voter_profile_repository.count()
                if self.voter_profile_repository is not None
                else 0
            )
            return ElectionStatsOutputDto(
                total_voters=total_voters,
                total_positions=len(positions),
                total_candidates=await self.candidate_repository.count(),
                total_votes=await self.ballot_repository.count(),
                votes_by_position=[
                    PositionVoteCount(
                        position_id=p.id or "",
                        title=p.title,
                        votes=votes_by_position.get(p.id or "", 0),
                    )
                    for p in positions
                ],
            )
        except Exception as e:
            logger.error(f"Failed to get election stats: {e}")
            return ElectionStatsOutputDto(success=False, error_message=str(e))

    async def _position_results(
        self, position: Position, published: set[str]
    ) -> PositionResultsItem:
        position_id = position.id or ""
        candidates = await self.candidate_repository.get_by_position_id(position_id)
        tally = await self.aggregate_votes(position_id, candidates)
        return PositionResultsItem(
            position=PositionOutputItem.from_entity(position),
            tally=tally,
            published=position_id in published,
        )
