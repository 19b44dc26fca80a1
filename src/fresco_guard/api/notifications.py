"""Expiry reminder endpoints polled by the client."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from fresco_guard.api.dependencies import require_user
from fresco_guard.domain.models import CurrentUser
from fresco_guard.services.notifications import serialize_notification

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/pending")
async def pending_notifications(
    request: Request, user: CurrentUser = Depends(require_user)
) -> list[dict[str, object]]:
    """Return delivered reminders the caller has not read yet."""
    container: AppContainer = request.app.state.container
    notifications = container.notification_processor.list_pending(user.id)
    return [serialize_notification(item) for item in notifications]


@router.post("/process")
async def process_notifications(
    request: Request, user: CurrentUser = Depends(require_user)
) -> dict[str, object]:
    """Finalize every due reminder of the caller."""
    container: AppContainer = request.app.state.container
    result = await container.notification_processor.process_pending(user.id)
    if result.total == 0:
        return {
            "success": True,
            "processed": 0,
            "message": "No hay notificaciones pendientes",
        }
    return {
        "success": True,
        "processed": result.processed,
        "errors": result.errors,
        "total": result.total,
    }


@router.post("/{notification_id}/read")
async def mark_notification_read(
    notification_id: UUID,
    request: Request,
    user: CurrentUser = Depends(require_user),
) -> dict[str, object]:
    """Flag a reminder as read."""
    container: AppContainer = request.app.state.container
    container.notification_processor.mark_read(user.id, notification_id)
    return {"success": True}
