"""役職リポジトリのインターフェース."""

from abc import abstractmethod

from ballotbox.domain.entities.position import Position
from ballotbox.domain.repositories.base import BaseRepository


class PositionRepository(BaseRepository[Position]):
    """役職のリポジトリインターフェース."""

    @abstractmethod
    async def get_active_positions(self) -> list[Position]:
        """投票受付中の役職をdisplay_order昇順で取得.

        Returns:
            役職エンティティのリスト
        """
        pass
