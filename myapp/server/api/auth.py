"""Authentication endpoints.

These handlers validate their input and answer with placeholder payloads.
Nothing is stored and no real tokens are issued: there is no user store or
token signing in this service yet.
"""

from fastapi import APIRouter, status

from myapp.observability import get_logger
from myapp.server.api.schemas import (
    LoginRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserSummary,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)

PLACEHOLDER_ACCESS_TOKEN = "sample-jwt-token"
PLACEHOLDER_REFRESH_TOKEN = "sample-refresh-token"
PLACEHOLDER_REFRESHED_TOKEN = "new-sample-jwt-token"


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(body: RegisterRequest) -> RegisterResponse:
    """Accept a registration and echo the public fields back."""
    logger.info("user_registration_received", email=body.email)
    return RegisterResponse(
        message="User registered successfully",
        user=UserSummary(email=body.email, name=body.name),
    )


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest) -> TokenResponse:
    logger.info("user_login_received", email=body.email)
    return TokenResponse(
        token=PLACEHOLDER_ACCESS_TOKEN,
        refresh_token=PLACEHOLDER_REFRESH_TOKEN,
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_token() -> RefreshResponse:
    return RefreshResponse(token=PLACEHOLDER_REFRESHED_TOKEN)
