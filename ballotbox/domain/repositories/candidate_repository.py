"""候補者リポジトリのインターフェース."""

from abc import abstractmethod

from ballotbox.domain.entities.candidate import Candidate
from ballotbox.domain.repositories.base import BaseRepository


class CandidateRepository(BaseRepository[Candidate]):
    """候補者のリポジトリインターフェース."""

    @abstractmethod
    async def get_by_position_id(self, position_id: str) -> list[Candidate]:
        """役職に属する候補者を登録順で取得.

        Args:
            position_id: 役職ID

        Returns:
            候補者エンティティのリスト
        """
        pass
