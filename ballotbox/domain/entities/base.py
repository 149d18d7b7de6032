"""Base entity class for all domain entities."""

from typing import Any


class BaseEntity:
    """全ドメインエンティティの基底クラス.

    IDはバックエンドが発行する不透明な文字列（UUID）で、
    永続化前はNoneとなる。
    """

    def __init__(self, id: str | None = None) -> None:
        self.id = id

    def __eq__(self, other: Any) -> bool:
        """同じ型かつ同じIDを持つ場合に等価とみなす."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        """IDに基づくハッシュ値を返す."""
        if self.id is None:
            return id(self)
        return hash((self.__class__.__name__, self.id))
