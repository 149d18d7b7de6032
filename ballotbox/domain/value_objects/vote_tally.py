"""開票集計結果の Value Object."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class VoteCount:
    """候補者ごとの得票数."""

    candidate_id: str
    candidate_name: str
    count: int


@dataclass(frozen=True)
class TallyResult:
    """役職ごとの集計結果.

    countsは得票数の降順。同数の場合は候補者の元の並び順を保つ。
    得票0の候補者も含まれる。
    """

    position_id: str
    counts: list[VoteCount] = field(default_factory=list)

    @property
    def total_votes(self) -> int:
        """有効投票の総数（孤立した投票は含まない）."""
        return sum(c.count for c in self.counts)

    @property
    def winner(self) -> VoteCount | None:
        """最多得票の候補者。投票が1件もなければNone."""
        if not self.counts or self.total_votes == 0:
            return None
        return self.counts[0]

    @property
    def is_tie(self) -> bool:
        """最多得票が複数の候補者で並んでいるかどうか."""
        if self.winner is None or len(self.counts) < 2:
            return False
        return self.counts[0].count == self.counts[1].count

    def percentage(self, candidate_id: str) -> float:
        """得票率（%）を返す。投票がなければ0.0."""
        total = self.total_votes
        if total == 0:
            return 0.0
        for c in self.counts:
            if c.candidate_id == candidate_id:
                return c.count / total * 100
        return 0.0
