"""管理者向けのCLIコマンド.

どのコマンドも解決済みロールがadminであることを確認してから実行する。
"""

import asyncio

import click

from ballotbox.application.dtos.candidate_dto import (
    CreateCandidateInputDto,
    UpdateCandidateInputDto,
)
from ballotbox.application.dtos.position_dto import (
    CreatePositionInputDto,
    UpdatePositionInputDto,
)
from ballotbox.application.dtos.results_dto import PublishResultsInputDto
from ballotbox.interfaces.cli.base import BaseCommand, with_error_handling
from ballotbox.interfaces.cli.session import command_session, credential_options


@click.command()
@click.argument("position_id")
@credential_options
@with_error_handling
def publish(position_id: str, email: str | None, password: str | None):
    """役職POSITION_IDの開票結果を公開する."""
    asyncio.run(_run_publish(position_id, email, password))


async def _run_publish(
    position_id: str, email: str | None, password: str | None
) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        usecase = ctx.container.use_cases.publish_results_usecase()
        result = await usecase.publish_results(
            PublishResultsInputDto(position_id=position_id, published_by=ctx.user_id)
        )

    if not result.success:
        BaseCommand.error(f"公開できませんでした: {result.error_message}")
        raise SystemExit(1)
    if result.already_published:
        BaseCommand.warning("この役職の開票結果は既に公開されています")
    else:
        BaseCommand.success("開票結果を公開しました")


@click.command()
@credential_options
@with_error_handling
def stats(email: str | None, password: str | None):
    """選挙全体の統計を表示する."""
    asyncio.run(_run_stats(email, password))


async def _run_stats(email: str | None, password: str | None) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        stat = await ctx.container.use_cases.view_results_usecase().get_election_stats()

    if not stat.success:
        BaseCommand.error(f"統計を取得できませんでした: {stat.error_message}")
        raise SystemExit(1)

    click.echo("=== 選挙統計 ===")
    click.echo(f"  登録投票者数:   {stat.total_voters:,}")
    click.echo(f"  役職数:         {stat.total_positions:,}")
    click.echo(f"  候補者数:       {stat.total_candidates:,}")
    click.echo(f"  総投票数:       {stat.total_votes:,}")
    if stat.votes_by_position:
        click.echo("\n=== 役職別投票数 ===")
        for row in stat.votes_by_position:
            click.echo(f"  {row.title}: {row.votes:>8,}票")


@click.group()
def position():
    """役職の管理."""
    pass


@position.command("add")
@click.argument("title")
@click.option("--description", help="説明")
@click.option("--display-order", type=int, help="表示順（省略時は末尾）")
@click.option("--inactive", is_flag=True, help="投票を受け付けない状態で作成")
@credential_options
@with_error_handling
def position_add(
    title: str,
    description: str | None,
    display_order: int | None,
    inactive: bool,
    email: str | None,
    password: str | None,
):
    """役職TITLEを追加する."""
    asyncio.run(
        _run_position_add(
            CreatePositionInputDto(
                title=title,
                description=description,
                display_order=display_order,
                active=not inactive,
            ),
            email,
            password,
        )
    )


async def _run_position_add(
    dto: CreatePositionInputDto, email: str | None, password: str | None
) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        usecase = ctx.container.use_cases.manage_positions_usecase()
        result = await usecase.create_position(dto)
    if not result.success:
        BaseCommand.error(f"役職を追加できませんでした: {result.error_message}")
        raise SystemExit(1)
    BaseCommand.success(f"役職を追加しました: {result.position_id}")


@position.command("update")
@click.argument("position_id")
@click.option("--title", required=True, help="役職名")
@click.option("--description", help="説明")
@click.option("--display-order", type=int, default=0, show_default=True)
@click.option("--active/--inactive", default=True, help="投票受付の有無")
@credential_options
@with_error_handling
def position_update(
    position_id: str,
    title: str,
    description: str | None,
    display_order: int,
    active: bool,
    email: str | None,
    password: str | None,
):
    """役職POSITION_IDを更新する."""
    asyncio.run(
        _run_position_update(
            UpdatePositionInputDto(
                id=position_id,
                title=title,
                description=description,
                display_order=display_order,
                active=active,
            ),
            email,
            password,
        )
    )


async def _run_position_update(
    dto: UpdatePositionInputDto, email: str | None, password: str | None
) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        usecase = ctx.container.use_cases.manage_positions_usecase()
        result = await usecase.update_position(dto)
    if not result.success:
        BaseCommand.error(f"役職を更新できませんでした: {result.error_message}")
        raise SystemExit(1)
    BaseCommand.success("役職を更新しました")


@position.command("delete")
@click.argument("position_id")
@click.option("--yes", is_flag=True, help="確認せずに削除")
@credential_options
@with_error_handling
def position_delete(
    position_id: str, yes: bool, email: str | None, password: str | None
):
    """役職POSITION_IDを削除する."""
    if not yes and not BaseCommand.confirm(f"役職 {position_id} を削除しますか？"):
        BaseCommand.show_progress("キャンセルしました")
        return
    asyncio.run(_run_position_delete(position_id, email, password))


async def _run_position_delete(
    position_id: str, email: str | None, password: str | None
) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        usecase = ctx.container.use_cases.manage_positions_usecase()
        result = await usecase.delete_position(position_id)
    if not result.success:
        BaseCommand.error(f"役職を削除できませんでした: {result.error_message}")
        raise SystemExit(1)
    BaseCommand.success("役職を削除しました")


@click.group()
def candidate():
    """候補者の管理."""
    pass


@candidate.command("add")
@click.argument("position_id")
@click.argument("name")
@click.option("--manifesto", help="公約")
@click.option("--image-ref", help="画像の参照（URLなど）")
@credential_options
@with_error_handling
def candidate_add(
    position_id: str,
    name: str,
    manifesto: str | None,
    image_ref: str | None,
    email: str | None,
    password: str | None,
):
    """役職POSITION_IDに候補者NAMEを追加する."""
    asyncio.run(
        _run_candidate_add(
            CreateCandidateInputDto(
                position_id=position_id,
                name=name,
                manifesto=manifesto,
                image_ref=image_ref,
            ),
            email,
            password,
        )
    )


async def _run_candidate_add(
    dto: CreateCandidateInputDto, email: str | None, password: str | None
) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        usecase = ctx.container.use_cases.manage_candidates_usecase()
        result = await usecase.create_candidate(dto)
    if not result.success:
        BaseCommand.error(f"候補者を追加できませんでした: {result.error_message}")
        raise SystemExit(1)
    BaseCommand.success(f"候補者を追加しました: {result.candidate_id}")


@candidate.command("update")
@click.argument("candidate_id")
@click.option("--name", required=True, help="候補者名")
@click.option("--manifesto", help="公約")
@click.option("--image-ref", help="画像の参照（URLなど）")
@credential_options
@with_error_handling
def candidate_update(
    candidate_id: str,
    name: str,
    manifesto: str | None,
    image_ref: str | None,
    email: str | None,
    password: str | None,
):
    """候補者CANDIDATE_IDを更新する（所属役職は変更しない）."""
    asyncio.run(
        _run_candidate_update(
            UpdateCandidateInputDto(
                id=candidate_id,
                name=name,
                manifesto=manifesto,
                image_ref=image_ref,
            ),
            email,
            password,
        )
    )


async def _run_candidate_update(
    dto: UpdateCandidateInputDto, email: str | None, password: str | None
) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        usecase = ctx.container.use_cases.manage_candidates_usecase()
        result = await usecase.update_candidate(dto)
    if not result.success:
        BaseCommand.error(f"候補者を更新できませんでした: {result.error_message}")
        raise SystemExit(1)
    BaseCommand.success("候補者を更新しました")


@candidate.command("delete")
@click.argument("candidate_id")
@click.option("--yes", is_flag=True, help="確認せずに削除")
@credential_options
@with_error_handling
def candidate_delete(
    candidate_id: str, yes: bool, email: str | None, password: str | None
):
    """候補者CANDIDATE_IDを削除する."""
    if not yes and not BaseCommand.confirm(f"候補者 {candidate_id} を削除しますか？"):
        BaseCommand.show_progress("キャンセルしました")
        return
    asyncio.run(_run_candidate_delete(candidate_id, email, password))


async def _run_candidate_delete(
    candidate_id: str, email: str | None, password: str | None
) -> None:
    async with command_session(email, password, require_admin=True) as ctx:
        usecase = ctx.container.use_cases.manage_candidates_usecase()
        result = await usecase.delete_candidate(candidate_id)
    if not result.success:
        BaseCommand.error(f"候補者を削除できませんでした: {result.error_message}")
        raise SystemExit(1)
    BaseCommand.success("候補者を削除しました")
