"""
Entrypoint for the MyApp HTTP service.

Startup is strictly ordered so misconfiguration fails fast:

1. load `.env` (optional) and the settings,
2. configure logging,
3. require `DATABASE_URL` - exit before touching the network otherwise,
4. ping the database with a bounded wait,
5. serve with uvicorn until SIGINT/SIGTERM, then drain for a short grace period.

Run with `myapp-server` or `python -m myapp.server.main`. For development
with reload, `uvicorn --factory myapp.server.main:bootstrap` also works.
"""

from __future__ import annotations

from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from myapp.config import ConfigError, Settings, load_settings, require_database_url
from myapp.db import DatabaseUnavailableError, create_engine, ping_database
from myapp.observability import configure_logging, get_logger
from myapp.server import create_app

logger = get_logger(__name__)

SHUTDOWN_GRACE_SECONDS = 5
_UVICORN_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def bootstrap(settings: Optional[Settings] = None) -> FastAPI:
    """
    Return a configured application instance.

    Callers that already hold settings (tests, custom runners) pass them in;
    otherwise they are read from the environment.
    """

    return create_app(settings or load_settings())


def uvicorn_log_level(level: str) -> str:
    """Map a LOG_LEVEL value onto a level name uvicorn accepts."""

    normalized = level.strip().lower()
    if normalized == "warn":
        return "warning"
    return normalized if normalized in _UVICORN_LEVELS else "info"


def build_server(app: FastAPI, settings: Settings) -> uvicorn.Server:
    """Create the uvicorn server; logging stays as `configure_logging` set it."""

    config = uvicorn.Config(
        app,
        host=settings.app_host,
        port=settings.listen_port,
        log_config=None,
        log_level=uvicorn_log_level(settings.log_level),
        access_log=not settings.is_production,
        timeout_graceful_shutdown=SHUTDOWN_GRACE_SECONDS,
    )
    return uvicorn.Server(config)


def main() -> None:
    dotenv_loaded = load_dotenv()
    settings = load_settings()
    configure_logging(level=settings.log_level, format=settings.log_format)

    if not dotenv_loaded:
        logger.info("dotenv_not_found", detail="using process environment only")

    try:
        database_url = require_database_url(settings)
    except ConfigError as exc:
        logger.error("database_url_missing", error=str(exc))
        raise SystemExit(1) from exc

    try:
        port = settings.listen_port
    except ValueError as exc:
        logger.error("invalid_app_port", app_port=settings.app_port)
        raise SystemExit(1) from exc

    try:
        engine = create_engine(database_url)
        ping_database(engine)
    except DatabaseUnavailableError as exc:
        logger.error("database_unavailable", error=str(exc))
        raise SystemExit(1) from exc

    try:
        server = build_server(create_app(settings), settings)
        logger.info(
            "server_starting",
            host=settings.app_host,
            port=port,
            environment=settings.app_env,
        )
        # uvicorn installs the SIGINT/SIGTERM handlers and exits non-zero
        # itself when the listener cannot be bound.
        server.run()
    finally:
        engine.dispose()

    if not server.started:
        logger.error("server_start_failed", host=settings.app_host, port=port)
        raise SystemExit(1)

    logger.info("server_stopped")


if __name__ == "__main__":
    main()
