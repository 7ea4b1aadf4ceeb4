"""
Versioned HTTP API for MyApp.

All public endpoints hang off `API_PREFIX`:

* `health` - liveness checks (no auth)
* `auth` - register/login/refresh placeholders (no auth)
* `profile` - routes behind the bearer-token gate
"""

from __future__ import annotations

from typing import Callable, Dict

from fastapi import APIRouter
from fastapi.routing import APIRoute

from myapp.server.api import auth, health, profile

API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}"

ROUTE_GROUPS = (health, auth, profile)


def build_router() -> APIRouter:
    """Return the v1 router with every route group registered."""

    router = APIRouter(prefix=API_PREFIX)
    for group in ROUTE_GROUPS:
        router.include_router(group.router)
    return router


def route_templates() -> Dict[Callable, str]:
    """
    Map each v1 endpoint function to its full path template.

    Used as the metrics label, e.g. `/api/v1/auth/login`. Computed from the
    route groups rather than the mounted app, whose route objects may carry
    only the path relative to the router they were declared on.
    """

    templates: Dict[Callable, str] = {}
    for group in ROUTE_GROUPS:
        prefix = group.router.prefix
        for route in group.router.routes:
            if not isinstance(route, APIRoute):
                continue
            path = route.path if route.path.startswith(prefix) else prefix + route.path
            templates[route.endpoint] = API_PREFIX + path
    return templates


__all__ = ["API_VERSION", "API_PREFIX", "ROUTE_GROUPS", "build_router", "route_templates"]
