"""投票者向けのCLIコマンド."""

import asyncio

import click

from ballotbox.application.dtos.ballot_dto import CastBallotInputDto
from ballotbox.interfaces.cli.base import BaseCommand, with_error_handling
from ballotbox.interfaces.cli.session import command_session, credential_options


@click.command()
@credential_options
@with_error_handling
def positions(email: str | None, password: str | None):
    """投票受付中の役職と候補者を表示する."""
    asyncio.run(_run_positions(email, password))


async def _run_positions(email: str | None, password: str | None) -> None:
    async with command_session(email, password, require_login=False) as ctx:
        usecase = ctx.container.use_cases.list_ballot_options_usecase()
        result = await usecase.list_open_positions()
        if not result.success:
            BaseCommand.error(f"役職を取得できませんでした: {result.error_message}")
            return
        if not result.positions:
            BaseCommand.warning("投票受付中の役職はありません")
            return

        for position in result.positions:
            click.echo(f"\n{position.title}  [{position.id}]")
            if position.description:
                click.echo(f"  {position.description}")
            candidates = await usecase.list_candidates(position.id or "")
            for candidate in candidates.candidates:
                click.echo(f"  - {candidate.name}  [{candidate.id}]")


@click.command()
@credential_options
@with_error_handling
def ballot(email: str | None, password: str | None):
    """自分の投票用紙（投票状況）を表示する."""
    asyncio.run(_run_ballot(email, password))


async def _run_ballot(email: str | None, password: str | None) -> None:
    async with command_session(email, password) as ctx:
        usecase = ctx.container.use_cases.list_ballot_options_usecase()
        sheet = await usecase.get_ballot_sheet(ctx.user_id)
        if not sheet.success:
            BaseCommand.error(f"投票用紙を取得できませんでした: {sheet.error_message}")
            return

        click.echo(
            f"投票状況: {sheet.votes_cast}/{sheet.total_positions} "
            f"({sheet.progress:.0f}%)"
        )
        for item in sheet.items:
            click.echo(f"\n{item.position.title}  [{item.position.id}]")
            if item.has_voted:
                voted = item.voted_candidate
                name = voted.name if voted else "不明な候補者"
                click.echo(click.style(f"  投票済み: {name}", fg="green"))
                continue
            if not item.candidates:
                click.echo("  候補者がいません")
                continue
            for candidate in item.candidates:
                click.echo(f"  - {candidate.name}  [{candidate.id}]")


@click.command()
@click.argument("position_id")
@click.argument("candidate_id")
@credential_options
@with_error_handling
def vote(
    position_id: str, candidate_id: str, email: str | None, password: str | None
):
    """役職POSITION_IDの候補者CANDIDATE_IDに投票する."""
    asyncio.run(_run_vote(position_id, candidate_id, email, password))


async def _run_vote(
    position_id: str, candidate_id: str, email: str | None, password: str | None
) -> None:
    async with command_session(email, password) as ctx:
        usecase = ctx.container.use_cases.cast_ballot_usecase()
        result = await usecase.cast_ballot(
            CastBallotInputDto(
                voter_id=ctx.user_id,
                position_id=position_id,
                candidate_id=candidate_id,
            )
        )

    if result.success:
        BaseCommand.success(result.message)
    elif result.is_duplicate:
        BaseCommand.warning(result.message)
    else:
        BaseCommand.error(result.message)
        raise SystemExit(1)


@click.command()
@credential_options
@with_error_handling
def results(email: str | None, password: str | None):
    """閲覧可能な開票結果を表示する（管理者は全役職）."""
    asyncio.run(_run_results(email, password))


async def _run_results(email: str | None, password: str | None) -> None:
    async with command_session(email, password) as ctx:
        usecase = ctx.container.use_cases.view_results_usecase()
        output = await usecase.list_visible_results(ctx.snapshot.role)

    if not output.success:
        BaseCommand.error(f"開票結果を取得できませんでした: {output.error_message}")
        return
    if not output.results:
        BaseCommand.warning("公開されている開票結果はありません")
        return

    for item in output.results:
        status = "公開済み" if item.published else "未公開"
        click.echo(f"\n{item.position.title} ({status})  総投票数: {item.tally.total_votes}")
        for count in item.tally.counts:
            percentage = item.tally.percentage(count.candidate_id)
            click.echo(
                f"  {count.candidate_name:<20} {count.count:>5}票 ({percentage:.1f}%)"
            )
        winner = item.tally.winner
        if winner is None:
            click.echo("  当選者: なし（投票なし）")
        elif item.tally.is_tie:
            click.echo(f"  当選者: {winner.candidate_name}（同票あり）")
        else:
            click.echo(click.style(f"  当選者: {winner.candidate_name}", fg="green"))
