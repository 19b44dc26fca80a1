"""Photo counter endpoints for the free-tier camera cap."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fresco_guard.api.dependencies import get_request_context, require_user
from fresco_guard.domain.models import CurrentUser
from fresco_guard.services.auth import RequestContext

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

router = APIRouter(prefix="/api/camera", tags=["camera"])


@router.get("/count")
async def photo_usage(
    request: Request, context: RequestContext = Depends(get_request_context)
) -> dict[str, object]:
    """Return photo usage; anonymous callers get the free plan defaults."""
    container: AppContainer = request.app.state.container
    return container.camera_service.get_usage(context.user).to_dict()


@router.post("/count")
async def register_photo(
    request: Request, user: CurrentUser = Depends(require_user)
) -> dict[str, object]:
    """Count a photo against the caller's plan."""
    container: AppContainer = request.app.state.container
    usage = container.camera_service.register_photo(user)
    return {"success": True, **usage.to_dict()}


@router.post("/reset")
async def reset_photos(
    request: Request, context: RequestContext = Depends(get_request_context)
) -> dict[str, object]:
    """Reset the photo counter outside production."""
    container: AppContainer = request.app.state.container
    container.camera_service.reset(context.user)
    return {"success": True, "message": "Contador de fotos reiniciado correctamente"}
