"""ロール割当リポジトリのインターフェース."""

from abc import ABC, abstractmethod


class RoleAssignmentRepository(ABC):
    """ロール割当（user_roles）の参照用インターフェース."""

    @abstractmethod
    async def get_roles_for_user(self, user_id: str) -> list[str]:
        """ユーザーに割り当てられたロール名を取得順で返す.

        Args:
            user_id: 認証ユーザーID

        Returns:
            ロール名のリスト（割当がなければ空）

        Raises:
            DatabaseError: 取得に失敗した場合
        """
        pass
