"""ロールの Value Object."""

from collections.abc import Iterable
from enum import Enum


class Role(Enum):
    """ユーザーの粗い権限区分.

    RoleAssignment（ロール割当の集合）から毎回導出され、
    それ自体が権威を持つことはない。
    """

    ADMIN = "admin"
    VOTER = "voter"
    UNKNOWN = "unknown"

    @classmethod
    def from_assignments(cls, labels: Iterable[str] | None) -> "Role":
        """ロール割当からロールを決定する.

        - adminを含む場合はadmin
        - それ以外は最初に見つかった割当
        - 割当が空、読めない、または既知のロールでない場合はvoter

        Args:
            labels: ロール名のリスト（取得順）

        Returns:
            決定したロール（ADMINまたはVOTER）
        """
        if labels is None:
            return cls.VOTER
        assigned = [label for label in labels if isinstance(label, str)]
        if cls.ADMIN.value in assigned:
            return cls.ADMIN
        if not assigned:
            return cls.VOTER
        try:
            first = cls(assigned[0])
        except ValueError:
            # 未知のロール名（editor等）はvoter扱い
            return cls.VOTER
        return first if first is not cls.UNKNOWN else cls.VOTER

    @property
    def is_admin(self) -> bool:
        """管理者かどうか."""
        return self is Role.ADMIN
