"""Domain models for tracked foods."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodRecord:
    """A food row owned by a single user."""

    id: UUID
    user_id: UUID
    name: str
    image_url: str | None
    expiry_date: date
    category: str | None
    notes: str | None
    expiry_status: str
    days_until_expiry: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
