"""アカウント関連のCLIコマンド."""

import asyncio

import click

from ballotbox.application.dtos.auth_dto import SignUpInputDto
from ballotbox.infrastructure.di.container import get_container, init_container
from ballotbox.interfaces.cli.base import BaseCommand, with_error_handling
from ballotbox.interfaces.cli.session import command_session, credential_options


INTRO_TEXT = """\
ballotbox へようこそ。

  1. `ballotbox positions` で投票受付中の役職と候補者を確認します。
  2. `ballotbox vote POSITION_ID CANDIDATE_ID` で投票します。
     各役職に投票できるのは1回だけで、投票後の変更はできません。
  3. 開票結果は管理者が公開した後に `ballotbox results` で確認できます。
"""


@click.command()
@click.option("--force", is_flag=True, help="表示済みでも再表示する")
@with_error_handling
def intro(force: bool):
    """初回の案内を表示する."""
    try:
        container = get_container()
    except RuntimeError:
        container = init_container()

    store = container.services.local_state_store()
    if store.onboarding_complete and not force:
        BaseCommand.show_progress("案内は表示済みです（--force で再表示）")
        return

    click.echo(INTRO_TEXT)
    store.mark_onboarding_complete()


@click.command()
@credential_options
@with_error_handling
def whoami(email: str | None, password: str | None):
    """現在のユーザーとロールを表示する."""
    asyncio.run(_run_whoami(email, password))


async def _run_whoami(email: str | None, password: str | None) -> None:
    async with command_session(email, password, require_login=False) as ctx:
        snapshot = ctx.snapshot

    if snapshot.identity is None:
        BaseCommand.show_progress("サインインしていません")
        return
    click.echo(f"ユーザーID: {snapshot.identity.id}")
    if snapshot.identity.email:
        click.echo(f"メール:     {snapshot.identity.email}")
    click.echo(f"ロール:     {snapshot.role.value}")


@click.command()
@click.option("--email", required=True, envvar="BALLOTBOX_EMAIL", help="メールアドレス")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    envvar="BALLOTBOX_PASSWORD",
    help="パスワード",
)
@click.option("--name", required=True, help="氏名")
@click.option("--department", help="所属学科")
@click.option("--registration-number", help="学籍番号")
@click.option("--phone-number", help="電話番号")
@with_error_handling
def signup(
    email: str,
    password: str,
    name: str,
    department: str | None,
    registration_number: str | None,
    phone_number: str | None,
):
    """投票者として登録する."""
    asyncio.run(
        _run_signup(
            SignUpInputDto(
                email=email,
                password=password,
                name=name,
                department=department,
                registration_number=registration_number,
                phone_number=phone_number,
            )
        )
    )


async def _run_signup(dto: SignUpInputDto) -> None:
    async with command_session(None, None, require_login=False) as ctx:
        result = await ctx.container.use_cases.authenticate_usecase().sign_up(dto)

    if not result.success:
        BaseCommand.error(f"登録できませんでした: {result.error_message}")
        raise SystemExit(1)
    BaseCommand.success(f"登録しました: {result.user_id}")
    if result.requires_confirmation:
        BaseCommand.warning("確認メールのリンクを開いてからサインインしてください")
