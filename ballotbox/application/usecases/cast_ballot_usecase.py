"""投票のユースケース."""

from __future__ import annotations

from ballotbox.application.dtos.ballot_dto import (
    CastBallotInputDto,
    CastBallotOutputDto,
    CastBallotStatus,
)
from ballotbox.common.logging import get_logger
from ballotbox.domain.entities import Ballot
from ballotbox.domain.exceptions import DuplicateVoteError, InvalidBallotError
from ballotbox.domain.repositories.ballot_repository import BallotRepository
from ballotbox.domain.repositories.candidate_repository import CandidateRepository
from ballotbox.domain.repositories.position_repository import PositionRepository


logger = get_logger(__name__)


class CastBallotUseCase:
    """1投票者1役職1票を守って投票を登録するユースケース.

    手元の「投票済み」集合は問い合わせを減らすための最適化にすぎない。
    本当の保証はバックエンドの (voter_id, position_id) 一意制約で、
    登録が一意制約で拒否された場合は重複投票として報告し、再試行しない。
    """

    CAST_MESSAGE = "投票を受け付けました。"
    DUPLICATE_VOTE_MESSAGE = "この役職には既に投票済みです。"
    CAST_FAILED_MESSAGE = "投票に失敗しました。もう一度お試しください。"
    POSITION_CLOSED_MESSAGE = "この役職は投票を受け付けていません。"
    CANDIDATE_MISMATCH_MESSAGE = "指定した候補者はこの役職に立候補していません。"

    def __init__(
        self,
        ballot_repository: BallotRepository,
        position_repository: PositionRepository,
        candidate_repository: CandidateRepository,
    ) -> None:
        """ユースケースを初期化する.

        Args:
            ballot_repository: 投票リポジトリインスタンス
            position_repository: 役職リポジトリインスタンス
            candidate_repository: 候補者リポジトリインスタンス
        """
        self.ballot_repository = ballot_repository
        self.position_repository = position_repository
        self.candidate_repository = candidate_repository
        self._voted: set[tuple[str, str]] = set()

    async def cast_ballot(self, input_dto: CastBallotInputDto) -> CastBallotOutputDto:
        """投票を1件登録する.

        Returns:
            成功・重複投票・失敗のいずれかを表す出力DTO
        """
        key = (input_dto.voter_id, input_dto.position_id)
        if key in self._voted:
            logger.info(
                "Ballot already cast",
                voter_id=input_dto.voter_id,
                position_id=input_dto.position_id,
            )
            return self._duplicate()

        try:
            await self._validate(input_dto)
        except InvalidBallotError as e:
            logger.info(f"Rejected invalid ballot: {e.message}", **e.details)
            return CastBallotOutputDto(
                status=CastBallotStatus.CAST_FAILED, message=e.message
            )
        except Exception as e:
            logger.error(f"Failed to validate ballot: {e}")
            return self._failed()

        ballot = Ballot(
            voter_id=input_dto.voter_id,
            position_id=input_dto.position_id,
            candidate_id=input_dto.candidate_id,
        )
        try:
            created = await self.ballot_repository.create(ballot)
        except DuplicateVoteError:
            # 一意制約による拒否は想定内の結果
            self._voted.add(key)
            logger.info(
                "Duplicate ballot rejected by backend",
                voter_id=input_dto.voter_id,
                position_id=input_dto.position_id,
            )
            return self._duplicate()
        except Exception as e:
            logger.error(f"Failed to cast ballot: {e}")
            return self._failed()

        self._voted.add(key)
        return CastBallotOutputDto(
            status=CastBallotStatus.CAST,
            message=self.CAST_MESSAGE,
            ballot_id=created.id,
        )

    async def has_voted(self, voter_id: str, position_id: str) -> bool:
        """(voter_id, position_id) の投票が存在するかを返す.

        書き込み側の一意制約と同じキーで問い合わせる。投票は削除されないので
        一度Trueになった結果は手元に保持する。
        """
        key = (voter_id, position_id)
        if key in self._voted:
            return True
        exists = await self.ballot_repository.exists(voter_id, position_id)
        if exists:
            self._voted.add(key)
        return exists

    async def _validate(self, input_dto: CastBallotInputDto) -> None:
        """役職が受付中で、候補者がその役職に属していることを確認する."""
        position = await self.position_repository.get_by_id(input_dto.position_id)
        if position is None or not position.is_open:
            raise InvalidBallotError(
                self.POSITION_CLOSED_MESSAGE,
                {"position_id": input_dto.position_id},
            )

        candidate = await self.candidate_repository.get_by_id(input_dto.candidate_id)
        if candidate is None or not candidate.belongs_to(input_dto.position_id):
            raise InvalidBallotError(
                self.CANDIDATE_MISMATCH_MESSAGE,
                {
                    "position_id": input_dto.position_id,
                    "candidate_id": input_dto.candidate_id,
                },
            )

    def _duplicate(self) -> CastBallotOutputDto:
        return CastBallotOutputDto(
            status=CastBallotStatus.DUPLICATE_VOTE,
            message=self.DUPLICATE_VOTE_MESSAGE,
        )

    def _failed(self) -> CastBallotOutputDto:
        return CastBallotOutputDto(
            status=CastBallotStatus.CAST_FAILED,
            message=self.CAST_FAILED_MESSAGE,
        )
