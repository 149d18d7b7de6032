"""CLIコマンド用のサインイン処理.

コマンドは1回ごとにサインインし、SessionResolverが解決した
SessionSnapshotを使ってロールを判定する。
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import click

from ballotbox.application.dtos.auth_dto import SignInInputDto
from ballotbox.domain.exceptions import AuthFailureError
from ballotbox.domain.value_objects.session_snapshot import SessionSnapshot
from ballotbox.infrastructure.di.container import (
    ApplicationContainer,
    get_container,
    init_container,
    shutdown_container,
)


@dataclass
class CommandContext:
    """コマンド実行中に使うコンテナとセッション."""

    container: ApplicationContainer
    snapshot: SessionSnapshot

    @property
    def user_id(self) -> str:
        if self.snapshot.identity is None:
            raise AuthFailureError("サインインしていません。")
        return self.snapshot.identity.id


def credential_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """--email / --password オプションを追加する."""
    func = click.option(
        "--password",
        envvar="BALLOTBOX_PASSWORD",
        help="パスワード（環境変数 BALLOTBOX_PASSWORD）",
    )(func)
    func = click.option(
        "--email",
        envvar="BALLOTBOX_EMAIL",
        help="メールアドレス（環境変数 BALLOTBOX_EMAIL）",
    )(func)
    return func


def _container() -> ApplicationContainer:
    try:
        return get_container()
    except RuntimeError:
        return init_container()


@asynccontextmanager
async def command_session(
    email: str | None,
    password: str | None,
    *,
    require_login: bool = True,
    require_admin: bool = False,
) -> AsyncIterator[CommandContext]:
    """サインインしてロールを解決し、終了時に後片付けする.

    Args:
        email: メールアドレス
        password: パスワード
        require_login: サインイン必須かどうか
        require_admin: 管理者ロール必須かどうか

    Raises:
        AuthFailureError: サインインに失敗した、または権限が無い場合
    """
    container = _container()
    try:
        resolver = container.services.session_resolver()
        await resolver.start()

        if email and password:
            result = await container.use_cases.authenticate_usecase().sign_in(
                SignInInputDto(email=email, password=password)
            )
            if not result.success:
                raise AuthFailureError(result.error_message or "サインインに失敗しました。")
        elif require_login or require_admin:
            raise AuthFailureError(
                "--email と --password を指定してください"
                "（または BALLOTBOX_EMAIL / BALLOTBOX_PASSWORD）。"
            )

        snapshot = resolver.snapshot
        if require_admin and not snapshot.is_admin:
            raise AuthFailureError("この操作には管理者権限が必要です。")

        yield CommandContext(container=container, snapshot=snapshot)
    finally:
        await shutdown_container()
