"""Endpoints behind the authentication gate."""

from fastapi import APIRouter, Depends

from myapp.server.api.schemas import ProfileResponse
from myapp.server.auth import require_principal

# Every route on this router passes through the gate.
router = APIRouter(tags=["profile"], dependencies=[Depends(require_principal)])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile() -> ProfileResponse:
    """Return the placeholder profile record."""
    return ProfileResponse(id=1, email="user@example.com", name="Sample User")
