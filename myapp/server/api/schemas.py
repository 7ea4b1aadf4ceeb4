"""Request and response bodies for the v1 API."""

from __future__ import annotations

from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field


def _check_email_format(value: str) -> str:
    # Syntax only; the address is echoed back exactly as submitted.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email_format)]


class RegisterRequest(BaseModel):
    email: EmailAddress
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: EmailAddress
    password: str = Field(..., min_length=1)


class UserSummary(BaseModel):
    email: str
    name: str


class RegisterResponse(BaseModel):
    message: str
    user: UserSummary


class TokenResponse(BaseModel):
    token: str
    refresh_token: str


class RefreshResponse(BaseModel):
    token: str


class ProfileResponse(BaseModel):
    id: int
    email: str
    name: str


class HealthResponse(BaseModel):
    status: str
    service: str


class PingResponse(BaseModel):
    message: str


__all__ = [
    "EmailAddress",
    "RegisterRequest",
    "LoginRequest",
    "UserSummary",
    "RegisterResponse",
    "TokenResponse",
    "RefreshResponse",
    "ProfileResponse",
    "HealthResponse",
    "PingResponse",
]
