"""
Database connection helpers shared by the server and the migration runner.

Neither entrypoint runs application queries; both only need to open an
engine against `DATABASE_URL` with a bounded connect wait and prove the
server is reachable before doing anything else.
"""

from __future__ import annotations

from typing import Any, Dict

import sqlalchemy as sa
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from myapp.observability import get_logger

__all__ = [
    "DatabaseError",
    "DatabaseUnavailableError",
    "PING_TIMEOUT_SECONDS",
    "create_engine",
    "normalize_database_url",
    "ping_database",
]

logger = get_logger(__name__)

PING_TIMEOUT_SECONDS = 10

# libpq-style URLs carry no driver; the service ships psycopg 3.
_POSTGRES_SCHEMES = ("postgres://", "postgresql://")
_POSTGRES_DRIVER_SCHEME = "postgresql+psycopg://"


class DatabaseError(Exception):
    """Base exception for database access failures."""


class DatabaseUnavailableError(DatabaseError):
    """Raised when the database cannot be opened or does not answer a ping."""


def normalize_database_url(database_url: str) -> str:
    """Map libpq-style `postgres://` URLs onto the SQLAlchemy psycopg dialect."""

    for scheme in _POSTGRES_SCHEMES:
        if database_url.startswith(scheme):
            return _POSTGRES_DRIVER_SCHEME + database_url[len(scheme):]
    return database_url


def create_engine(database_url: str, connect_timeout: int = PING_TIMEOUT_SECONDS) -> Engine:
    """
    Build an engine whose connection attempts give up after `connect_timeout`.

    Raises:
        DatabaseUnavailableError: if the URL is malformed or names a dialect
            whose driver is not installed.
    """

    try:
        url = make_url(normalize_database_url(database_url))
        return sa.create_engine(
            url,
            connect_args=_timeout_connect_args(url.get_backend_name(), connect_timeout),
        )
    except (SQLAlchemyError, ImportError) as exc:
        raise DatabaseUnavailableError(f"open database: {exc}") from exc


def ping_database(engine: Engine) -> None:
    """
    Open a connection and run a trivial query.

    Raises:
        DatabaseUnavailableError: if the database does not answer.
    """

    try:
        with engine.connect() as conn:
            conn.execute(sa.text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise DatabaseUnavailableError(f"ping database: {exc}") from exc
    logger.debug("database_ping_ok", backend=engine.url.get_backend_name())


def _timeout_connect_args(backend: str, timeout: int) -> Dict[str, Any]:
    if backend in {"postgresql", "mysql"}:
        return {"connect_timeout": timeout}
    if backend == "sqlite":
        return {"timeout": float(timeout)}
    return {}
