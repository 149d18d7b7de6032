"""Position entity."""

from ballotbox.domain.entities.base import BaseEntity


class Position(BaseEntity):
    """投票対象の役職を表すエンティティ.

    候補者や投票とは独立して存在する。active=Trueの役職のみが
    投票画面に表示され、display_orderの昇順で並べられる。
    """

    def __init__(
        self,
        title: str,
        description: str | None = None,
        display_order: int = 0,
        active: bool = True,
        id: str | None = None,
    ) -> None:
        """役職エンティティを初期化する.

        Args:
            title: 役職名（例: 会長）
            description: 役職の説明
            display_order: 表示順
            active: 投票受付中かどうか
            id: 役職ID
        """
        super().__init__(id)
        self.title = title
        self.description = description
        self.display_order = display_order
        self.active = active

    def __str__(self) -> str:
        """文字列表現を返す."""
        return self.title

    @property
    def is_open(self) -> bool:
        """投票を受け付けているかどうか."""
        return self.active
