"""Ballot entity."""

from datetime import datetime

from ballotbox.domain.entities.base import BaseEntity


class Ballot(BaseEntity):
    """投票（1票）を表すエンティティ.

    (voter_id, position_id) の組につき高々1件しか存在しない。
    この制約はバックエンドの一意制約で保証される。
    作成後は更新も削除もされない。
    """

    def __init__(
        self,
        voter_id: str,
        position_id: str,
        candidate_id: str,
        created_at: datetime | None = None,
        id: str | None = None,
    ) -> None:
        """投票エンティティを初期化する.

        Args:
            voter_id: 投票者のユーザーID
            position_id: 役職ID
            candidate_id: 投票先の候補者ID
            created_at: 投票日時
            id: 投票ID
        """
        super().__init__(id)
        self.voter_id = voter_id
        self.position_id = position_id
        self.candidate_id = candidate_id
        self.created_at = created_at

    def __str__(self) -> str:
        """文字列表現を返す."""
        return (
            f"Ballot(voter_id={self.voter_id}, "
            f"position_id={self.position_id}, "
            f"candidate_id={self.candidate_id})"
        )
