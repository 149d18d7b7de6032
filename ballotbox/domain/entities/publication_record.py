"""PublicationRecord entity."""

from datetime import datetime

from ballotbox.domain.entities.base import BaseEntity


class PublicationRecord(BaseEntity):
    """開票結果の公開記録.

    役職ごとに高々1件。このレコードの存在だけが、
    投票者に集計結果を見せてよいことを示す。
    """

    def __init__(
        self,
        position_id: str,
        published_by: str | None = None,
        published_at: datetime | None = None,
        id: str | None = None,
    ) -> None:
        super().__init__(id)
        self.position_id = position_id
        self.published_by = published_by
        self.published_at = published_at

    def __str__(self) -> str:
        """文字列表現を返す."""
        return f"PublicationRecord(position_id={self.position_id})"
