"""役職管理に関するDTO."""

from dataclasses import dataclass


@dataclass
class CreatePositionInputDto:
    """役職作成の入力DTO."""

    title: str
    description: str | None = None
    display_order: int | None = None
    active: bool = True


@dataclass
class UpdatePositionInputDto:
    """役職更新の入力DTO."""

    id: str
    title: str
    description: str | None = None
    display_order: int = 0
    active: bool = True


@dataclass
class CreatePositionOutputDto:
    """役職作成の出力DTO."""

    success: bool
    position_id: str | None = None
    error_message: str | None = None


@dataclass
class UpdatePositionOutputDto:
    """役職更新の出力DTO."""

    success: bool
    error_message: str | None = None


@dataclass
class DeletePositionOutputDto:
    """役職削除の出力DTO."""

    success: bool
    error_message: str | None = None
