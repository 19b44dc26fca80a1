"""Domain models for expiry reminders."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

EXPIRY_SOON = "EXPIRY_SOON"
EXPIRY_TODAY = "EXPIRY_TODAY"
RECIPE_SUGGESTION = "RECIPE_SUGGESTION"
SUBSCRIPTION_RENEWAL = "SUBSCRIPTION_RENEWAL"


@dataclass(frozen=True)
class NotificationDraft:
    """A reminder that has not been persisted yet."""

    user_id: UUID
    food_id: UUID | None
    title: str
    message: str
    type: str
    days_offset: int
    scheduled: datetime


@dataclass(frozen=True)
class NotificationRecord:
    """A persisted reminder."""

    id: UUID
    user_id: UUID
    food_id: UUID | None
    title: str
    message: str
    type: str
    days_offset: int | None
    scheduled: datetime
    sent: bool
    read: bool
    created_at: datetime | None = None


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a notification processing batch."""

    processed: int
    errors: int
    total: int
