"""開票集計ドメインサービス."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ballotbox.domain.entities.candidate import Candidate
from ballotbox.domain.value_objects.vote_tally import TallyResult, VoteCount


class VoteTallyService:
    """役職ごとの得票数を集計するドメインサービス."""

    @staticmethod
    def tally(
        position_id: str,
        candidates: Sequence[Candidate],
        counts_by_candidate: Mapping[str, int],
    ) -> TallyResult:
        """候補者ごとの得票数を集計する.

        役職に属する全候補者を得票0でも含め、得票数の降順に並べる。
        sorted()は安定ソートなので、同数の候補者は元の並び順を保つ。
        候補者が見つからない投票（削除された候補者への投票）は無視する。

        Args:
            position_id: 役職ID
            candidates: 役職の候補者（表示順）
            counts_by_candidate: 候補者ID -> 得票数

        Returns:
            集計結果
        """
        rows = [
            VoteCount(
                candidate_id=candidate.id or "",
                candidate_name=candidate.name,
                count=counts_by_candidate.get(candidate.id or "", 0),
            )
            for candidate in candidates
            if candidate.belongs_to(position_id)
        ]
        ranked = sorted(rows, key=lambda row: row.count, reverse=True)
        return TallyResult(position_id=position_id, counts=ranked)
