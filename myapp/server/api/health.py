"""Liveness endpoints.

Exposes:
- GET /health: fixed status body for load balancers and container health checks
- GET /ping  : trivial round-trip check
"""

from fastapi import APIRouter

from myapp.server.api.schemas import HealthResponse, PingResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", service="api")


@router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    return PingResponse(message="pong")
