"""投票リポジトリのインターフェース."""

from abc import ABC, abstractmethod

from ballotbox.domain.entities.ballot import Ballot


class BallotRepository(ABC):
    """投票のリポジトリインターフェース.

    投票は作成のみで、更新・削除の経路は持たない。
    """

    @abstractmethod
    async def create(self, ballot: Ballot) -> Ballot:
        """投票を1件登録する.

        Args:
            ballot: 登録する投票

        Returns:
            ID付きの投票エンティティ

        Raises:
            DuplicateVoteError: 同じ (voter_id, position_id) の投票が既に存在する
            DatabaseError: その他の登録失敗
        """
        pass

    @abstractmethod
    async def exists(self, voter_id: str, position_id: str) -> bool:
        """(voter_id, position_id) の投票が存在するか.

        書き込み側の一意制約と同じキーで判定する。
        """
        pass

    @abstractmethod
    async def get_by_voter_id(self, voter_id: str) -> list[Ballot]:
        """投票者の全投票を取得."""
        pass

    @abstractmethod
    async def count_by_candidate(self, position_id: str) -> dict[str, int]:
        """役職の投票を候補者IDごとに数える.

        Returns:
            候補者ID -> 得票数。投票のない候補者は含まれない。
        """
        pass

    @abstractmethod
    async def count_by_position(self) -> dict[str, int]:
        """役職IDごとの投票数を返す."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """投票の総数を返す."""
        pass
