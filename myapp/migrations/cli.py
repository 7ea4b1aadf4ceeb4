"""Command-line interface for schema migrations.

    myapp-migrate up
    myapp-migrate down --steps=2
    myapp-migrate redo
    myapp-migrate status

`DATABASE_URL` must be set (a `.env` file is honoured). Any failure exits
with status 1 and the cause on stderr.
"""

from __future__ import annotations

from typing import Optional

import click
from dotenv import load_dotenv

from myapp import __version__
from myapp.config import ConfigError, load_settings, require_database_url
from myapp.db import DatabaseError
from myapp.migrations import runner
from myapp.migrations.exceptions import MigrationError
from myapp.observability import configure_logging, get_logger

logger = get_logger(__name__)

ACTIONS = ("up", "down", "redo", "status")
USAGE = "Usage: migrate <up|down|redo|status> [--steps=N]"


def run_action(action: str, database_url: str, steps: int) -> None:
    """Dispatch `action` to the runner and print anything it reports."""

    if action == "up":
        runner.up(database_url)
    elif action == "down":
        runner.down(database_url, steps)
    elif action == "redo":
        runner.redo(database_url)
    elif action == "status":
        for state in runner.status(database_url):
            click.echo(f"{state.label:<8} {state.revision}  {state.description}")
    else:
        raise ValueError(f"unknown migration action: {action}")


@click.command(name="migrate")
@click.argument("action", required=False)
@click.option(
    "--steps",
    type=int,
    default=1,
    show_default=True,
    help="Number of migrations to roll back when using down.",
)
@click.version_option(__version__)
@click.pass_context
def cli(ctx: click.Context, action: Optional[str], steps: int) -> None:
    """Apply, roll back or inspect database migrations.

    ACTION is one of: up, down, redo, status.
    """
    if action not in ACTIONS:
        click.echo(USAGE)
        ctx.exit(1)

    load_dotenv()
    settings = load_settings()
    configure_logging(level=settings.log_level, format=settings.log_format)

    try:
        database_url = require_database_url(settings)
    except ConfigError as exc:
        logger.error("database_url_missing", error=str(exc))
        click.echo(str(exc), err=True)
        ctx.exit(1)

    try:
        run_action(action, database_url, steps)
    except (MigrationError, DatabaseError) as exc:
        logger.error("migration_failed", action=action, error=str(exc))
        click.echo(f"migrations {action} failed: {exc}", err=True)
        ctx.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
