"""開票結果に関するDTO."""

from dataclasses import dataclass, field

from ballotbox.application.dtos.ballot_dto import PositionOutputItem
from ballotbox.domain.value_objects.vote_tally import TallyResult


@dataclass
class PublishResultsInputDto:
    """開票結果公開の入力DTO."""

    position_id: str
    published_by: str


@dataclass
class PublishResultsOutputDto:
    """開票結果公開の出力DTO.

    既に公開済みの場合も成功として扱う。
    """

    success: bool
    already_published: bool = False
    error_message: str | None = None


@dataclass
class PositionResultsItem:
    """役職ごとの集計結果."""

    position: PositionOutputItem
    tally: TallyResult
    published: bool


@dataclass
class ListResultsOutputDto:
    """開票結果一覧の出力DTO."""

    results: list[PositionResultsItem] = field(default_factory=list)
    success: bool = True
    error_message: str | None = None


@dataclass
class PositionVoteCount:
    """役職ごとの投票数."""

    position_id: str
    title: str
    votes: int


@dataclass
class ElectionStatsOutputDto:
    """選挙全体の統計（管理画面用）."""

    total_voters: int = 0
    total_positions: int = 0
    total_candidates: int = 0
    total_votes: int = 0
    votes_by_position: list[PositionVoteCount] = field(default_factory=list)
    success: bool = True
    error_message: str | None = None
