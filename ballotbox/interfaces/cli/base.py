"""CLIコマンドの共通処理."""

import functools
import sys

from collections.abc import Callable
from typing import Any

import click

from ballotbox.common.logging import get_logger
from ballotbox.domain.exceptions import BallotBoxException, TransientBackendError
from ballotbox.infrastructure.exceptions import InfrastructureException


logger = get_logger(__name__)


class BaseCommand:
    """CLIコマンドの基底クラス（表示用ヘルパー）."""

    @staticmethod
    def show_progress(message: str) -> None:
        click.echo(message)

    @staticmethod
    def success(message: str) -> None:
        click.echo(click.style(f"✓ {message}", fg="green"))

    @staticmethod
    def warning(message: str) -> None:
        click.echo(click.style(f"⚠️  {message}", fg="yellow"))

    @staticmethod
    def error(message: str) -> None:
        click.echo(click.style(f"✗ {message}", fg="red"), err=True)

    @staticmethod
    def confirm(message: str) -> bool:
        return click.confirm(message)


def with_error_handling(func: Callable[..., Any]) -> Callable[..., Any]:
    """コマンドで発生した例外をメッセージに変換し、終了コード1で終了する."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except TransientBackendError as e:
            logger.warning(f"Backend unavailable: {e.message}", **e.details)
            BaseCommand.error(f"サーバーに接続できません: {e.message}")
            sys.exit(1)
        except BallotBoxException as e:
            BaseCommand.error(e.message)
            sys.exit(1)
        except InfrastructureException as e:
            logger.error(f"Infrastructure error: {e}")
            BaseCommand.error(str(e))
            sys.exit(1)
        except Exception as e:
            logger.exception("Unexpected error")
            BaseCommand.error(f"予期しないエラーが発生しました: {e}")
            sys.exit(1)

    return wrapper
