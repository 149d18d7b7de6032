"""投票に関するDTO.

このモジュールは投票画面と投票処理に関するDTOを定義します。
"""

from dataclasses import dataclass, field
from enum import Enum

from ballotbox.domain.entities import Candidate, Position


# =============================================================================
# Output Items
# =============================================================================


@dataclass
class PositionOutputItem:
    """役職の出力アイテム."""

    id: str | None
    title: str
    description: str | None
    display_order: int
    active: bool

    @classmethod
    def from_entity(cls, entity: Position) -> "PositionOutputItem":
        """エンティティから出力アイテムを生成する."""
        return cls(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            display_order=entity.display_order,
            active=entity.active,
        )


@dataclass
class CandidateOutputItem:
    """候補者の出力アイテム."""

    id: str | None
    position_id: str
    name: str
    manifesto: str | None
    image_ref: str | None

    @classmethod
    def from_entity(cls, entity: Candidate) -> "CandidateOutputItem":
        """エンティティから出力アイテムを生成する."""
        return cls(
            id=entity.id,
            position_id=entity.position_id,
            name=entity.name,
            manifesto=entity.manifesto,
            image_ref=entity.image_ref,
        )


@dataclass
class BallotSheetItem:
    """投票用紙の1役職分."""

    position: PositionOutputItem
    candidates: list[CandidateOutputItem]
    has_voted: bool = False
    voted_candidate_id: str | None = None

    @property
    def voted_candidate(self) -> CandidateOutputItem | None:
        """投票済みの候補者（見つからなければNone）."""
        if self.voted_candidate_id is None:
            return None
        for candidate in self.candidates:
            if candidate.id == self.voted_candidate_id:
                return candidate
        return None

    @property
    def is_votable(self) -> bool:
        """未投票かつ候補者がいる場合に投票可能."""
        return not self.has_voted and len(self.candidates) > 0


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class CastBallotInputDto:
    """投票の入力DTO."""

    voter_id: str
    position_id: str
    candidate_id: str


# =============================================================================
# Output DTOs
# =============================================================================


class CastBallotStatus(Enum):
    """投票結果の区分."""

    CAST = "cast"
    DUPLICATE_VOTE = "duplicate_vote"
    CAST_FAILED = "cast_failed"


@dataclass
class CastBallotOutputDto:
    """投票の出力DTO.

    呼び出し側は成功・重複投票・その他の失敗の3つだけを区別する。
    """

    status: CastBallotStatus
    message: str
    ballot_id: str | None = None

    @property
    def success(self) -> bool:
        """投票が記録されたかどうか."""
        return self.status is CastBallotStatus.CAST

    @property
    def is_duplicate(self) -> bool:
        """既に投票済みだったかどうか."""
        return self.status is CastBallotStatus.DUPLICATE_VOTE


@dataclass
class ListPositionsOutputDto:
    """役職一覧取得の出力DTO."""

    positions: list[PositionOutputItem]
    success: bool = True
    error_message: str | None = None


@dataclass
class ListCandidatesOutputDto:
    """候補者一覧取得の出力DTO."""

    candidates: list[CandidateOutputItem]
    success: bool = True
    error_message: str | None = None


@dataclass
class BallotSheetOutputDto:
    """投票用紙（投票者ごとの全役職）の出力DTO."""

    items: list[BallotSheetItem] = field(default_factory=list)
    success: bool = True
    error_message: str | None = None

    @property
    def votes_cast(self) -> int:
        """投票済みの役職数."""
        return sum(1 for item in self.items if item.has_voted)

    @property
    def total_positions(self) -> int:
        """投票対象の役職数."""
        return len(self.items)

    @property
    def progress(self) -> float:
        """投票の進捗率（%）."""
        if not self.items:
            return 0.0
        return self.votes_cast / self.total_positions * 100
