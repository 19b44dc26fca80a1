"""Profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fresco_guard.api.dependencies import require_user
from fresco_guard.api.schemas import UpdateProfileInput
from fresco_guard.domain.models import CurrentUser

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/profile")
async def get_profile(
    request: Request, user: CurrentUser = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's profile."""
    container: AppContainer = request.app.state.container
    return {"user": container.profile_service.get_profile(user)}


@router.put("/profile")
async def update_profile(
    payload: UpdateProfileInput,
    request: Request,
    user: CurrentUser = Depends(require_user),
) -> dict[str, object]:
    """Update the caller's name or notification preference."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.update_profile(
        user,
        name=payload.name,
        notifications_enabled=payload.notifications_enabled,
    )
    return {"success": True, "user": profile}
