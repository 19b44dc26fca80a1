"""Expiry reminder scheduling and processing."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from fresco_guard.domain.expiry import days_until
from fresco_guard.domain.notifications import (
    EXPIRY_SOON,
    EXPIRY_TODAY,
    NotificationDraft,
    NotificationRecord,
    ProcessResult,
)
from fresco_guard.domain.recipes import GeneratedRecipe
from fresco_guard.errors import NotFoundError
from fresco_guard.services.recipes import RecipeGenerator

logger = logging.getLogger(__name__)

REMINDER_OFFSETS = (3, 2, 1, 0)
REMINDER_TIME = time(hour=9)
PENDING_LIMIT = 10

# Rows written before days_offset existed only carry the phrase.
LEGACY_PHRASES = (
    ("vence en 3 días", 3),
    ("vence en 2 días", 2),
    ("vence mañana", 1),
    ("vence hoy", 0),
)


class NotificationRepository(Protocol):
    """Persistence interface for reminders."""

    def create_notifications(self, drafts: list[NotificationDraft]) -> None:
        """Insert reminder rows in a single statement."""

    def list_due(self, user_id: UUID, now: datetime) -> list[NotificationRecord]:
        """Return unsent reminders scheduled at or before now, earliest first."""

    def list_delivered_unread(
        self, user_id: UUID, now: datetime, limit: int
    ) -> list[NotificationRecord]:
        """Return sent but unread reminders, newest first."""

    def finalize(self, notification_id: UUID, title: str, message: str) -> None:
        """Store the final content and flag the reminder as sent."""

    def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        """Flag a reminder as read; return false when it does not exist."""


class ExpiringFoodsLookup(Protocol):
    """Query used to find foods inside a reminder window."""

    def list_names_expiring_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[str]:
        """Return names of foods whose expiry date falls in [start, end]."""


def reminder_title(offset: int) -> str:
    if offset == 0:
        return "Alimento vence hoy"
    return "Alimento próximo a vencer"


def reminder_message(food_name: str, offset: int) -> str:
    if offset == 0:
        return f"{food_name} vence hoy"
    if offset == 1:
        return f"{food_name} vence mañana"
    return f"{food_name} vence en {offset} días"


def days_from_message(message: str) -> int:
    """Infer the reminder offset from a legacy message."""
    for phrase, days in LEGACY_PHRASES:
        if phrase in message:
            return days
    return 0


@dataclass
class NotificationScheduler:
    """Creates the reminder rows for a newly tracked food."""

    repository: NotificationRepository
    timezone_name: str

    def build_reminders(
        self,
        food_id: UUID | None,
        food_name: str,
        expiry_date: date,
        user_id: UUID,
        today: date,
    ) -> list[NotificationDraft]:
        """Return up to four reminders, skipping offsets already in the past."""
        tz = ZoneInfo(self.timezone_name)
        diff_days = days_until(expiry_date, today)
        drafts = []
        for offset in REMINDER_OFFSETS:
            if diff_days < offset:
                continue
            day = expiry_date - timedelta(days=offset)
            drafts.append(
                NotificationDraft(
                    user_id=user_id,
                    food_id=food_id,
                    title=reminder_title(offset),
                    message=reminder_message(food_name, offset),
                    type=EXPIRY_TODAY if offset == 0 else EXPIRY_SOON,
                    days_offset=offset,
                    scheduled=datetime.combine(day, REMINDER_TIME, tzinfo=tz),
                )
            )
        return drafts

    def schedule_for_food(
        self,
        food_id: UUID | None,
        food_name: str,
        expiry_date: date,
        user_id: UUID,
        today: date,
    ) -> list[NotificationDraft]:
        """Persist reminders for a food; failures are logged, never raised."""
        try:
            drafts = self.build_reminders(
                food_id, food_name, expiry_date, user_id, today
            )
            if drafts:
                self.repository.create_notifications(drafts)
        except Exception:
            logger.exception(
                "Failed to schedule notifications",
                extra={"food_id": str(food_id), "user_id": str(user_id)},
            )
            return []
        return drafts


@dataclass
class NotificationProcessor:
    """Finalizes due reminders, attaching a recipe suggestion when possible."""

    repository: NotificationRepository
    foods: ExpiringFoodsLookup
    recipes: RecipeGenerator
    timezone_name: str

    async def process_pending(
        self, user_id: UUID, now: datetime | None = None
    ) -> ProcessResult:
        """Process every due, unsent reminder of a user."""
        current = now or datetime.now(tz=UTC)
        today = current.astimezone(ZoneInfo(self.timezone_name)).date()
        due = self.repository.list_due(user_id, current)
        processed = 0
        errors = 0
        for notification in due:
            try:
                message = await self._compose_message(notification, today)
                self.repository.finalize(notification.id, notification.title, message)
            except Exception:
                logger.exception(
                    "Failed to process notification",
                    extra={"notification_id": str(notification.id)},
                )
                errors += 1
            else:
                processed += 1
        return ProcessResult(processed=processed, errors=errors, total=len(due))

    def list_pending(
        self, user_id: UUID, now: datetime | None = None, limit: int = PENDING_LIMIT
    ) -> list[NotificationRecord]:
        """Return delivered reminders the user has not read yet."""
        current = now or datetime.now(tz=UTC)
        return self.repository.list_delivered_unread(user_id, current, limit)

    def mark_read(self, user_id: UUID, notification_id: UUID) -> None:
        """Flag a reminder as read."""
        if not self.repository.mark_read(user_id, notification_id):
            raise NotFoundError("Notificación no encontrada")

    async def _compose_message(
        self, notification: NotificationRecord, today: date
    ) -> str:
        days = (
            notification.days_offset
            if notification.days_offset is not None
            else days_from_message(notification.message)
        )
        names = self.foods.list_names_expiring_between(
            notification.user_id, today, today + timedelta(days=days)
        )
        ingredients = list(dict.fromkeys(names))
        if not ingredients:
            return notification.message
        recipe = await self._suggest(ingredients)
        if recipe is None or not recipe.title:
            return notification.message
        message = f"{notification.message}. Te recomendamos: {recipe.title}"
        if recipe.description:
            message += f" - {recipe.description}"
        return message

    async def _suggest(self, ingredients: list[str]) -> GeneratedRecipe | None:
        try:
            return await self.recipes.generate(ingredients)
        except Exception:
            logger.warning(
                "Recipe suggestion failed", extra={"ingredients": ingredients}
            )
            return None


def serialize_notification(notification: NotificationRecord) -> dict[str, object]:
    """Return the JSON shape of a reminder row."""
    return {
        "id": str(notification.id),
        "user_id": str(notification.user_id),
        "food_id": str(notification.food_id) if notification.food_id else None,
        "title": notification.title,
        "message": notification.message,
        "type": notification.type,
        "days_offset": notification.days_offset,
        "scheduled": notification.scheduled.isoformat(),
        "sent": notification.sent,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }
