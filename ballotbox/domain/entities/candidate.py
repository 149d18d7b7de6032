"""Candidate entity."""

from ballotbox.domain.entities.base import BaseEntity


class Candidate(BaseEntity):
    """候補者を表すエンティティ.

    候補者は必ずひとつの役職に属する。作成後に所属役職を
    付け替えることはない。
    """

    def __init__(
        self,
        position_id: str,
        name: str,
        manifesto: str | None = None,
        image_ref: str | None = None,
        id: str | None = None,
    ) -> None:
        """候補者エンティティを初期化する.

        Args:
            position_id: 所属する役職ID
            name: 候補者名
            manifesto: 公約
            image_ref: 候補者画像の公開URL
            id: 候補者ID
        """
        super().__init__(id)
        self.position_id = position_id
        self.name = name
        self.manifesto = manifesto
        self.image_ref = image_ref

    def __str__(self) -> str:
        """文字列表現を返す."""
        return self.name

    def belongs_to(self, position_id: str) -> bool:
        """指定した役職の候補者かどうかを判定する."""
        return self.position_id == position_id
