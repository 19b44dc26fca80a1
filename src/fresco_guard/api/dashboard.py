"""Dashboard summary endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from fresco_guard.api.dependencies import get_request_context
from fresco_guard.services.auth import RequestContext

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard")
async def dashboard(
    request: Request, context: RequestContext = Depends(get_request_context)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return container.dashboard_service.summary(context.user)
