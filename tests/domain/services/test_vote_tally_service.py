"""Tests for VoteTallyService."""

from ballotbox.domain.entities.candidate import Candidate
from ballotbox.domain.services.vote_tally_service import VoteTallyService


def _candidates() -> list[Candidate]:
    return [
        Candidate(id="c1", position_id="p1", name="Alice"),
        Candidate(id="c2", position_id="p1", name="Bob"),
        Candidate(id="c3", position_id="p1", name="Carol"),
    ]


class TestVoteTallyService:
    """Test cases for VoteTallyService."""

    def test_orders_by_count_descending(self) -> None:
        result = VoteTallyService.tally("p1", _candidates(), {"c1": 1, "c2": 5, "c3": 3})

        assert [c.candidate_id for c in result.counts] == ["c2", "c3", "c1"]
        assert result.total_votes == 9
        assert result.winner is not None
        assert result.winner.candidate_name == "Bob"
        assert result.is_tie is False

    def test_includes_zero_vote_candidates(self) -> None:
        result = VoteTallyService.tally("p1", _candidates(), {"c2": 2})

        assert len(result.counts) == 3
        assert {c.candidate_id: c.count for c in result.counts} == {
            "c1": 0,
            "c2": 2,
            "c3": 0,
        }

    def test_ties_keep_original_candidate_order(self) -> None:
        result = VoteTallyService.tally("p1", _candidates(), {"c1": 2, "c3": 2})

        assert [c.candidate_id for c in result.counts] == ["c1", "c3", "c2"]
        assert result.winner is not None
        assert result.winner.candidate_id == "c1"
        assert result.is_tie is True

    def test_no_votes_has_no_winner(self) -> None:
        result = VoteTallyService.tally("p1", _candidates(), {})

        assert result.total_votes == 0
        assert result.winner is None
        assert result.is_tie is False
        assert result.percentage("c1") == 0.0

    def test_no_candidates(self) -> None:
        result = VoteTallyService.tally("p1", [], {"c9": 4})

        assert result.counts == []
        assert result.winner is None

    def test_orphan_ballots_are_ignored(self) -> None:
        result = VoteTallyService.tally("p1", _candidates(), {"c1": 1, "deleted": 10})

        assert result.total_votes == 1
        assert "deleted" not in [c.candidate_id for c in result.counts]

    def test_candidates_of_other_positions_are_excluded(self) -> None:
        candidates = _candidates() + [Candidate(id="x1", position_id="p2", name="Xavier")]

        result = VoteTallyService.tally("p1", candidates, {"x1": 3})

        assert [c.candidate_id for c in result.counts] == ["c1", "c2", "c3"]
        assert result.total_votes == 0

    def test_percentage(self) -> None:
        result = VoteTallyService.tally("p1", _candidates(), {"c1": 1, "c2": 3})

        assert result.percentage("c2") == 75.0
        assert result.percentage("c3") == 0.0
        assert result.percentage("missing") == 0.0
