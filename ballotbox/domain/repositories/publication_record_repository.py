"""開票結果公開記録リポジトリのインターフェース."""

from abc import ABC, abstractmethod

from ballotbox.domain.entities.publication_record import PublicationRecord


class PublicationRecordRepository(ABC):
    """開票結果公開記録のリポジトリインターフェース."""

    @abstractmethod
    async def create_if_absent(self, record: PublicationRecord) -> bool:
        """公開記録が無ければ作成する.

        Args:
            record: 作成する公開記録

        Returns:
            新規に作成した場合True、既に存在した場合False
        """
        pass

    @abstractmethod
    async def get_by_position_id(self, position_id: str) -> PublicationRecord | None:
        """役職の公開記録を取得."""
        pass

    @abstractmethod
    async def get_published_position_ids(self) -> set[str]:
        """公開済みの役職IDを全て取得."""
        pass
