"""投票者プロフィールリポジトリのインターフェース."""

from abc import ABC, abstractmethod

from ballotbox.domain.entities.voter_profile import VoterProfile


class VoterProfileRepository(ABC):
    """投票者プロフィールのリポジトリインターフェース."""

    @abstractmethod
    async def create(self, profile: VoterProfile) -> VoterProfile:
        """プロフィールを作成する."""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> VoterProfile | None:
        """ユーザーIDでプロフィールを取得."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """登録投票者数を返す."""
        pass
