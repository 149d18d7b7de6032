"""候補者管理に関するDTO."""

from dataclasses import dataclass


@dataclass
class CreateCandidateInputDto:
    """候補者作成の入力DTO."""

    position_id: str
    name: str
    manifesto: str | None = None
    image_ref: str | None = None


@dataclass
class UpdateCandidateInputDto:
    """候補者更新の入力DTO.

    所属役職は変更できない。
    """

    id: str
    name: str
    manifesto: str | None = None
    image_ref: str | None = None


@dataclass
class CreateCandidateOutputDto:
    """候補者作成の出力DTO."""

    success: bool
    candidate_id: str | None = None
    error_message: str | None = None


@dataclass
class UpdateCandidateOutputDto:
    """候補者更新の出力DTO."""

    success: bool
    error_message: str | None = None


@dataclass
class DeleteCandidateOutputDto:
    """候補者削除の出力DTO."""

    success: bool
    error_message: str | None = None
