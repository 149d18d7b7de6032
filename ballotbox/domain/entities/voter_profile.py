"""VoterProfile entity."""

from ballotbox.domain.entities.base import BaseEntity


class VoterProfile(BaseEntity):
    """登録投票者のプロフィール.

    サインアップ時に認証ユーザーと1対1で作成される。
    """

    def __init__(
        self,
        user_id: str,
        email: str,
        name: str,
        department: str | None = None,
        registration_number: str | None = None,
        phone_number: str | None = None,
        id: str | None = None,
    ) -> None:
        """プロフィールエンティティを初期化する.

        Args:
            user_id: 認証ユーザーID
            email: メールアドレス
            name: 氏名
            department: 所属学科
            registration_number: 学籍番号
            phone_number: 電話番号
            id: プロフィールID
        """
        super().__init__(id)
        self.user_id = user_id
        self.email = email
        self.name = name
        self.department = department
        self.registration_number = registration_number
        self.phone_number = phone_number

    def __str__(self) -> str:
        """文字列表現を返す."""
        return f"{self.name} <{self.email}>"
