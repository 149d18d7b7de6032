"""構造化ロギングの設定.

structlogを標準loggingの上に構成し、全モジュールから
``get_logger(__name__)`` で同じ設定のロガーを取得できるようにする。
"""

import logging
import sys

from typing import Any

import structlog


_configured = False


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = False,
) -> None:
    """ロギングを初期化する.

    Args:
        log_level: ログレベル（DEBUG, INFO, WARNING, ERROR）
        json_format: TrueならJSON形式、Falseならコンソール形式で出力
    """
    global _configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> Any:
    """ロガーを取得する.

    setup_logging()が未呼び出しの場合はデフォルト設定で初期化する。

    Args:
        name: ロガー名（通常は ``__name__``）

    Returns:
        structlogのBoundLogger
    """
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)
