"""Supabase repository for expiry reminders."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fresco_guard.adapters.supabase_errors import parse_timestamp, storage_errors
from fresco_guard.domain.notifications import NotificationDraft, NotificationRecord
from fresco_guard.services.notifications import NotificationRepository


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase implementation for the notifications table."""

    client: Client

    def create_notifications(self, drafts: list[NotificationDraft]) -> None:
        """Insert reminder rows in a single statement."""
        payload = [
            {
                "user_id": str(draft.user_id),
                "food_id": str(draft.food_id) if draft.food_id else None,
                "title": draft.title,
                "message": draft.message,
                "type": draft.type,
                "days_offset": draft.days_offset,
                "scheduled": draft.scheduled.isoformat(),
                "sent": False,
            }
            for draft in drafts
        ]
        if not payload:
            return
        with storage_errors("Error al programar notificaciones"):
            self.client.table("notifications").insert(payload).execute()

    def list_due(self, user_id: UUID, now: datetime) -> list[NotificationRecord]:
        """Return unsent reminders scheduled at or before now."""
        with storage_errors("Error al obtener notificaciones pendientes"):
            response = (
                self.client.table("notifications")
                .select("*")
                .eq("user_id", str(user_id))
                .eq("sent", False)
                .lte("scheduled", now.isoformat())
                .order("scheduled", desc=False)
                .execute()
            )
        return [_parse_notification(row) for row in response.data or []]

    def list_delivered_unread(
        self, user_id: UUID, now: datetime, limit: int
    ) -> list[NotificationRecord]:
        """Return sent but unread reminders, newest first."""
        with storage_errors("Error al obtener notificaciones"):
            response = (
                self.client.table("notifications")
                .select("*")
                .eq("user_id", str(user_id))
                .eq("sent", True)
                .eq("read", False)
                .lte("scheduled", now.isoformat())
                .order("scheduled", desc=True)
                .limit(limit)
                .execute()
            )
        return [_parse_notification(row) for row in response.data or []]

    def finalize(self, notification_id: UUID, title: str, message: str) -> None:
        """Store the final content and flag the reminder as sent."""
        with storage_errors("Error al actualizar la notificación"):
            self.client.table("notifications").update(
                {"title": title, "message": message, "sent": True}
            ).eq("id", str(notification_id)).execute()

    def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        """Flag a reminder as read."""
        with storage_errors("Error al actualizar la notificación"):
            response = (
                self.client.table("notifications")
                .update({"read": True})
                .eq("id", str(notification_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        return bool(response.data)


def _parse_notification(row: dict[str, object]) -> NotificationRecord:
    days_offset = row.get("days_offset")
    scheduled = parse_timestamp(row.get("scheduled"))
    if scheduled is None:
        raise ValueError(f"Notification {row.get('id')} has no schedule")
    return NotificationRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_id=UUID(str(row["food_id"])) if row.get("food_id") else None,
        title=str(row.get("title", "")),
        message=str(row.get("message", "")),
        type=str(row.get("type", "")),
        days_offset=int(days_offset) if days_offset is not None else None,
        scheduled=scheduled,
        sent=bool(row.get("sent")),
        read=bool(row.get("read")),
        created_at=parse_timestamp(row.get("created_at")),
    )
