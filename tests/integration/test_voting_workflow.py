"""統合テスト: 投票から開票結果公開までの流れ.

SQLite上に本番と同じスキーマを作り、実際のリポジトリ実装を通して
一意制約による二重投票・二重公開の防止を確認する。
"""

import asyncio

import pytest

from ballotbox.application.dtos.ballot_dto import CastBallotInputDto, CastBallotStatus
from ballotbox.application.dtos.results_dto import PublishResultsInputDto
from ballotbox.application.usecases.cast_ballot_usecase import CastBallotUseCase
from ballotbox.application.usecases.list_ballot_options_usecase import (
    ListBallotOptionsUseCase,
)
from ballotbox.application.usecases.publish_results_usecase import (
    PublishResultsUseCase,
)
from ballotbox.application.usecases.view_results_usecase import ViewResultsUseCase
from ballotbox.domain.entities import Ballot, Candidate, Position
from ballotbox.domain.exceptions import DuplicateVoteError
from ballotbox.domain.value_objects.role import Role
from ballotbox.infrastructure.persistence.ballot_repository_impl import (
    BallotRepositoryImpl,
)
from ballotbox.infrastructure.persistence.candidate_repository_impl import (
    CandidateRepositoryImpl,
)
from ballotbox.infrastructure.persistence.position_repository_impl import (
    PositionRepositoryImpl,
)
from ballotbox.infrastructure.persistence.publication_record_repository_impl import (
    PublicationRecordRepositoryImpl,
)
from ballotbox.infrastructure.persistence.session_adapters import SyncSessionAdapter


class Repositories:
    """同じセッションを共有するリポジトリ群."""

    def __init__(self, session: SyncSessionAdapter) -> None:
        self.positions = PositionRepositoryImpl(session)
        self.candidates = CandidateRepositoryImpl(session)
        self.ballots = BallotRepositoryImpl(session)
        self.publications = PublicationRecordRepositoryImpl(session)


@pytest.fixture
def repos(session_adapter: SyncSessionAdapter) -> Repositories:
    return Repositories(session_adapter)


async def seed_election(repos: Repositories) -> tuple[Position, list[Candidate]]:
    """役職1件と候補者2名を登録する."""
    position = await repos.positions.create(Position(title="会長", display_order=1))
    assert position.id is not None
    alice = await repos.candidates.create(
        Candidate(position_id=position.id, name="Alice", manifesto="図書館の24時間化")
    )
    bob = await repos.candidates.create(Candidate(position_id=position.id, name="Bob"))
    return position, [alice, bob]


@pytest.mark.integration
class TestBallotUniqueness:
    """二重投票防止の統合テスト."""

    @pytest.mark.asyncio
    async def test_second_ballot_is_rejected_by_constraint(
        self, repos: Repositories
    ) -> None:
        position, (alice, bob) = await seed_election(repos)
        assert position.id and alice.id and bob.id

        await repos.ballots.create(
            Ballot(voter_id="u1", position_id=position.id, candidate_id=alice.id)
        )
        with pytest.raises(DuplicateVoteError):
            await repos.ballots.create(
                Ballot(voter_id="u1", position_id=position.id, candidate_id=bob.id)
            )

        assert await repos.ballots.count() == 1
        assert await repos.ballots.count_by_candidate(position.id) == {alice.id: 1}

    @pytest.mark.asyncio
    async def test_session_usable_after_duplicate(self, repos: Repositories) -> None:
        position, (alice, _) = await seed_election(repos)
        assert position.id and alice.id
        ballot = Ballot(voter_id="u1", position_id=position.id, candidate_id=alice.id)

        await repos.ballots.create(ballot)
        with pytest.raises(DuplicateVoteError):
            await repos.ballots.create(ballot)
        await repos.ballots.create(
            Ballot(voter_id="u2", position_id=position.id, candidate_id=alice.id)
        )

        assert await repos.ballots.count_by_position() == {position.id: 2}
        assert await repos.ballots.exists("u2", position.id) is True
        assert await repos.ballots.exists("u3", position.id) is False

    @pytest.mark.asyncio
    async def test_fresh_usecase_reports_duplicate(self, repos: Repositories) -> None:
        position, (alice, bob) = await seed_election(repos)
        assert position.id and alice.id and bob.id

        first = CastBallotUseCase(repos.ballots, repos.positions, repos.candidates)
        result = await first.cast_ballot(
            CastBallotInputDto(
                voter_id="u1", position_id=position.id, candidate_id=alice.id
            )
        )
        assert result.status == CastBallotStatus.CAST

        # 手元の投票済み集合を持たない別プロセスからの再投票
        second = CastBallotUseCase(repos.ballots, repos.positions, repos.candidates)
        result = await second.cast_ballot(
            CastBallotInputDto(
                voter_id="u1", position_id=position.id, candidate_id=bob.id
            )
        )

        assert result.status == CastBallotStatus.DUPLICATE_VOTE
        assert await repos.ballots.count_by_candidate(position.id) == {alice.id: 1}
        assert await second.has_voted("u1", position.id) is True

    @pytest.mark.asyncio
    async def test_concurrent_casts_record_one_ballot(
        self, repos: Repositories
    ) -> None:
        position, (alice, bob) = await seed_election(repos)
        assert position.id and alice.id and bob.id
        usecases = [
            CastBallotUseCase(repos.ballots, repos.positions, repos.candidates)
            for _ in range(4)
        ]

        results = await asyncio.gather(
            *(
                usecase.cast_ballot(
                    CastBallotInputDto(
                        voter_id="u1", position_id=position.id, candidate_id=cid
                    )
                )
                for usecase, cid in zip(
                    usecases, [alice.id, bob.id, alice.id, bob.id], strict=True
                )
            )
        )

        statuses = [result.status for result in results]
        assert statuses.count(CastBallotStatus.CAST) == 1
        assert statuses.count(CastBallotStatus.DUPLICATE_VOTE) == 3
        counts = await repos.ballots.count_by_candidate(position.id)
        assert sum(counts.values()) == 1
        for usecase in usecases:
            assert await usecase.has_voted("u1", position.id) is True


@pytest.mark.integration
class TestResultsWorkflow:
    """公開と開票結果閲覧の統合テスト."""

    @pytest.mark.asyncio
    async def test_publish_is_idempotent(self, repos: Repositories) -> None:
        position, _ = await seed_election(repos)
        assert position.id
        usecase = PublishResultsUseCase(repos.publications)

        first = await usecase.publish_results(
            PublishResultsInputDto(position_id=position.id, published_by="admin-1")
        )
        second = await usecase.publish_results(
            PublishResultsInputDto(position_id=position.id, published_by="admin-2")
        )

        assert first.success and not first.already_published
        assert second.success and second.already_published
        assert await repos.publications.count() == 1
        record = await repos.publications.get_by_position_id(position.id)
        assert record is not None
        assert record.published_by == "admin-1"

    @pytest.mark.asyncio
    async def test_voter_sees_only_published_results(
        self, repos: Repositories
    ) -> None:
        position, (alice, bob) = await seed_election(repos)
        other = await repos.positions.create(Position(title="会計", display_order=2))
        assert position.id and other.id and alice.id and bob.id
        for voter_id, candidate in (("u1", alice), ("u2", alice), ("u3", bob)):
            assert candidate.id
            await repos.ballots.create(
                Ballot(
                    voter_id=voter_id,
                    position_id=position.id,
                    candidate_id=candidate.id,
                )
            )

        view = ViewResultsUseCase(
            repos.positions, repos.candidates, repos.ballots, repos.publications
        )
        before = await view.list_visible_results(Role.VOTER)
        assert before.success
        assert before.results == []

        await PublishResultsUseCase(repos.publications).publish_results(
            PublishResultsInputDto(position_id=position.id, published_by="admin-1")
        )

        voter_view = await view.list_visible_results(Role.VOTER)
        assert [r.position.id for r in voter_view.results] == [position.id]
        tally = voter_view.results[0].tally
        assert tally.total_votes == 3
        assert tally.winner is not None
        assert tally.winner.candidate_name == "Alice"
        assert tally.is_tie is False

        admin_view = await view.list_visible_results(Role.ADMIN)
        assert [r.position.id for r in admin_view.results] == [position.id, other.id]
        assert [r.published for r in admin_view.results] == [True, False]

    @pytest.mark.asyncio
    async def test_ballot_sheet_marks_voted_positions(
        self, repos: Repositories
    ) -> None:
        position, (alice, _) = await seed_election(repos)
        closed = await repos.positions.create(
            Position(title="書記", display_order=2, active=False)
        )
        assert position.id and closed.id and alice.id
        await repos.ballots.create(
            Ballot(voter_id="u1", position_id=position.id, candidate_id=alice.id)
        )

        usecase = ListBallotOptionsUseCase(
            repos.positions, repos.candidates, repos.ballots
        )
        sheet = await usecase.get_ballot_sheet("u1")

        assert sheet.success
        assert [item.position.id for item in sheet.items] == [position.id]
        assert sheet.items[0].has_voted is True
        assert sheet.items[0].voted_candidate_id == alice.id
