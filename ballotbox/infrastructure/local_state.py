"""端末ローカルの状態保存.

保存するのはオンボーディング表示済みフラグだけで、
認証情報や投票に関わる情報は一切書き込まない。
"""

import logging
import os
import tempfile

from pathlib import Path

from pydantic import BaseModel, ValidationError


logger = logging.getLogger(__name__)


class LocalState(BaseModel):
    """ローカル状態ファイルの内容."""

    onboarding_complete: bool = False


class LocalStateStore:
    """JSONファイルにローカル状態を保存する."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> LocalState:
        """状態を読み込む。ファイルが無い・壊れている場合は初期状態を返す."""
        if not self.path.exists():
            return LocalState()
        try:
            return LocalState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable local state {self.path}: {e}")
            return LocalState()

    def save(self, state: LocalState) -> None:
        """状態を書き込む（一時ファイル経由で置き換える）."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=".state-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(state.model_dump_json())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @property
    def onboarding_complete(self) -> bool:
        return self.load().onboarding_complete

    def mark_onboarding_complete(self) -> None:
        """オンボーディングを表示済みにする."""
        self.save(LocalState(onboarding_complete=True))
