"""
Middleware and error handlers installed by `create_app`.

- CORS restricted to the configured origins.
- Request logging: one `http_request` event per request with a correlation
  ID, plus Prometheus counters.
- Error responses rendered as `{"error": "<message>"}`; request validation
  failures are reported as 400 rather than FastAPI's default 422.
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from myapp.observability import (
    clear_correlation_id,
    get_logger,
    record_request,
    set_correlation_id,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128
UNMATCHED_ROUTE = "<unmatched>"


def install_cors(app: FastAPI, allowed_origins: Iterable[str]) -> None:
    """Allow cross-origin calls from the configured origins only."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag the request with a correlation ID, time it and log the outcome."""

    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and len(incoming) > MAX_REQUEST_ID_LENGTH:
        incoming = None
    correlation_id = set_correlation_id(incoming)
    start = time.perf_counter()
    try:
        response = await call_next(request)
        duration = time.perf_counter() - start
        record_request(request.method, route_template(request), response.status_code, duration)
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration * 1000, 3),
        )
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response
    finally:
        clear_correlation_id()


def route_template(request: Request) -> str:
    """Path template for metrics labels; unmatched requests share one label."""

    templates = getattr(request.app.state, "route_templates", {})
    endpoint = request.scope.get("endpoint")
    if endpoint in templates:
        return templates[endpoint]
    return getattr(request.scope.get("route"), "path", UNMATCHED_ROUTE)


def format_validation_error(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into "field: message" pairs."""

    parts = []
    for error in exc.errors():
        location = ".".join(
            str(item) for item in error.get("loc", ()) if item != "body"
        )
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else f"body: {message}")
    return "; ".join(parts) or "invalid request"


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = format_validation_error(exc)
    logger.info("request_validation_failed", path=request.url.path, error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def install_middleware(app: FastAPI, allowed_origins: Iterable[str]) -> None:
    """Install logging, CORS and error rendering on `app`."""

    app.middleware("http")(log_requests)
    # Added last so it wraps the logger and answers preflight requests first.
    install_cors(app, allowed_origins)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)


__all__ = [
    "MAX_REQUEST_ID_LENGTH",
    "REQUEST_ID_HEADER",
    "UNMATCHED_ROUTE",
    "install_cors",
    "install_middleware",
    "log_requests",
    "format_validation_error",
    "route_template",
]
