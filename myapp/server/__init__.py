"""
HTTP application for MyApp.

`create_app` is the only place the FastAPI instance is assembled, so tests,
uvicorn and `myapp.server.main` all get the same wiring:

* middleware (request logging, CORS, error rendering) from `middleware`,
* the versioned API router from `myapp.server.api`,
* the token validator used by the authentication gate,
* a Prometheus `/metrics` endpoint and a plain-text `/healthz` liveness check,
  both outside the versioned prefix.

Settings are passed in explicitly; nothing here reads the environment.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Response
from fastapi.responses import PlainTextResponse

from myapp import __version__
from myapp.config import Settings
from myapp.observability import (
    get_logger,
    get_metrics_content_type,
    get_metrics_output,
)
from myapp.server.api import API_PREFIX, build_router, route_templates
from myapp.server.auth import PlaceholderTokenValidator, TokenValidator
from myapp.server.middleware import install_middleware

logger = get_logger(__name__)


def create_app(
    settings: Settings,
    token_validator: Optional[TokenValidator] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Loaded settings. Production mode disables debug output.
        token_validator: Validator for the authentication gate. Defaults to
            `PlaceholderTokenValidator`.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "server_started",
            app_name=settings.app_name,
            environment=settings.app_env,
            api_prefix=API_PREFIX,
        )
        yield
        logger.info("server_shutdown")

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=not settings.is_production,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_validator = token_validator or PlaceholderTokenValidator()
    app.state.route_templates = route_templates()

    install_middleware(app, settings.cors_allowed_origins)
    app.include_router(build_router())

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(
            content=get_metrics_output(),
            media_type=get_metrics_content_type(),
        )

    @app.get("/healthz", response_class=PlainTextResponse, include_in_schema=False)
    async def healthz() -> str:
        return "ok"

    return app


__all__ = ["create_app"]
