"""
Authentication gate for protected route groups.

The gate is split in two so the token check can be swapped without touching
routing:

* `TokenValidator` - anything with `validate(token) -> Principal | None`.
* `require_principal` - FastAPI dependency that extracts the bearer token
  from the `Authorization` header and asks the app's validator about it.

The shipped `PlaceholderTokenValidator` performs no signature or expiry
checks. It accepts any non-empty bearer token so the protected routes are
reachable while real token issuance is still undecided. Install a real
validator with `create_app(settings, token_validator=...)`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from myapp.observability import get_logger

logger = get_logger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Identity attached to an authenticated request."""

    subject: str
    token: str


@runtime_checkable
class TokenValidator(Protocol):
    """Decides whether a bearer token grants access."""

    def validate(self, token: str) -> Optional[Principal]:
        ...


class PlaceholderTokenValidator:
    """Accepts any non-empty token and maps it to a fixed placeholder subject."""

    subject = "placeholder-user"

    def validate(self, token: str) -> Optional[Principal]:
        if not token.strip():
            return None
        return Principal(subject=self.subject, token=token)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Principal:
    """Resolve the caller's principal or reject the request with 401."""

    if credentials is None:
        raise _unauthorized("authorization header with bearer token is required")

    validator: TokenValidator = request.app.state.token_validator
    principal = validator.validate(credentials.credentials)
    if principal is None:
        logger.info("auth_token_rejected", path=request.url.path)
        raise _unauthorized("invalid or expired token")

    request.state.principal = principal
    return principal


__all__ = [
    "Principal",
    "TokenValidator",
    "PlaceholderTokenValidator",
    "require_principal",
]
