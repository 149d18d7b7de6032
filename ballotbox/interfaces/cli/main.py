"""ballotbox CLI エントリポイント."""

import click

from ballotbox import __version__
from ballotbox.common.logging import setup_logging
from ballotbox.infrastructure.config.settings import get_settings
from ballotbox.interfaces.cli.commands.account_commands import intro, signup, whoami
from ballotbox.interfaces.cli.commands.admin_commands import (
    candidate,
    position,
    publish,
    stats,
)
from ballotbox.interfaces.cli.commands.voting_commands import (
    ballot,
    positions,
    results,
    vote,
)


@click.group()
@click.version_option(__version__, prog_name="ballotbox")
@click.option("--log-level", help="ログレベル（既定は LOG_LEVEL 環境変数）")
def cli(log_level: str | None):
    """ballotbox - 学内選挙の投票CLI."""
    settings = get_settings()
    setup_logging(
        log_level=log_level or settings.log_level, json_format=settings.log_json
    )


cli.add_command(intro)
cli.add_command(whoami)
cli.add_command(signup)
cli.add_command(positions)
cli.add_command(ballot)
cli.add_command(vote)
cli.add_command(results)
cli.add_command(publish)
cli.add_command(stats)
cli.add_command(position)
cli.add_command(candidate)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
