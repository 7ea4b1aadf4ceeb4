"""
MyApp schema migrations - Alembic-backed runner.

Every operation follows the same shape: open an engine with a bounded connect
timeout, ping it, then run Alembic against the revisions shipped in
`myapp/migrations/versions` inside a single transaction. Alembic owns the
version table, ordering and execution; this module only decides which
Alembic command to run and treats "nothing left to do" as success.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Set, TypeVar

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from myapp.db import PING_TIMEOUT_SECONDS, create_engine, ping_database
from myapp.migrations.exceptions import MigrationExecutionError
from myapp.observability import get_logger

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent

T = TypeVar("T")


@dataclass(frozen=True)
class MigrationState:
    """Applied/pending state of one revision."""

    revision: str
    description: str
    applied: bool

    @property
    def label(self) -> str:
        return "applied" if self.applied else "pending"


def up(database_url: str) -> Optional[str]:
    """
    Apply all pending migrations.

    Returns:
        The revision the database is at afterwards (None for an empty history).
    """

    def _apply(config: Config, connection: Connection) -> Optional[str]:
        before = _current_revision(connection)
        command.upgrade(config, "head")
        after = _current_revision(connection)
        if before == after:
            logger.info("migrations_up_to_date", revision=after)
        else:
            logger.info("migrations_applied", from_revision=before, to_revision=after)
        return after

    return _with_database(database_url, "up", _apply)


def down(database_url: str, steps: int = 1) -> int:
    """
    Roll back `steps` migrations, one at a time (values below 1 mean 1).

    Reaching the base of the history before `steps` rollbacks is not an
    error; the rollback simply stops there.

    Returns:
        Number of migrations actually rolled back.
    """

    steps = max(steps, 1)

    def _rollback(config: Config, connection: Connection) -> int:
        rolled_back = 0
        for _ in range(steps):
            current = _current_revision(connection)
            if current is None:
                logger.info(
                    "migrations_at_base",
                    requested_steps=steps,
                    rolled_back=rolled_back,
                )
                break
            command.downgrade(config, "-1")
            rolled_back += 1
            logger.info("migration_rolled_back", revision=current)
        return rolled_back

    return _with_database(database_url, "down", _rollback)


def redo(database_url: str) -> Optional[str]:
    """
    Roll back the most recent migration, then apply everything pending.

    Revisions that were already pending before the rollback are applied too.

    Returns:
        The revision the database is at afterwards, or None when no
        migration was applied.
    """

    def _redo(config: Config, connection: Connection) -> Optional[str]:
        current = _current_revision(connection)
        if current is None:
            logger.info("migrations_nothing_to_redo")
            return None
        command.downgrade(config, "-1")
        command.upgrade(config, "head")
        after = _current_revision(connection)
        logger.info("migration_redone", rolled_back=current, revision=after)
        return after

    return _with_database(database_url, "redo", _redo)


def status(database_url: str) -> List[MigrationState]:
    """
    Report every known revision, oldest first, with its applied flag.
    """

    def _status(config: Config, connection: Connection) -> List[MigrationState]:
        script = ScriptDirectory.from_config(config)
        applied = _applied_revisions(script, connection)

        states = [
            MigrationState(
                revision=rev.revision,
                description=(rev.doc or "").strip(),
                applied=rev.revision in applied,
            )
            for rev in reversed(list(script.walk_revisions()))
        ]
        for state in states:
            logger.info(
                "migration_status",
                revision=state.revision,
                description=state.description,
                state=state.label,
            )
        return states

    return _with_database(database_url, "status", _status)


def build_config(connection: Optional[Connection] = None) -> Config:
    """Alembic config bound to the packaged revisions (no alembic.ini needed)."""

    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def _with_database(
    database_url: str,
    action: str,
    fn: Callable[[Config, Connection], T],
) -> T:
    engine = create_engine(database_url, connect_timeout=PING_TIMEOUT_SECONDS)
    try:
        ping_database(engine)
        try:
            with engine.begin() as connection:
                return fn(build_config(connection), connection)
        except (CommandError, SQLAlchemyError) as exc:
            raise MigrationExecutionError(
                f"execute migration: {exc}", action=action
            ) from exc
    finally:
        engine.dispose()


def _current_revision(connection: Connection) -> Optional[str]:
    return MigrationContext.configure(connection).get_current_revision()


def _applied_revisions(script: ScriptDirectory, connection: Connection) -> Set[str]:
    applied: Set[str] = set()
    for head in MigrationContext.configure(connection).get_current_heads():
        applied.update(
            rev.revision for rev in script.walk_revisions(base="base", head=head)
        )
    return applied


__all__ = [
    "MIGRATIONS_DIR",
    "MigrationState",
    "build_config",
    "down",
    "redo",
    "status",
    "up",
]
