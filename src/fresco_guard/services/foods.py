"""Food tracking business logic."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from fresco_guard.domain.expiry import (
    EXPIRED,
    EXPIRING_SOON,
    SAFE,
    classify_expiry,
    local_today,
)
from fresco_guard.domain.foods import FoodRecord
from fresco_guard.domain.models import CurrentUser
from fresco_guard.errors import (
    MISSING_TABLE,
    UNIQUE_VIOLATION,
    LimitReachedError,
    NotFoundError,
    StorageError,
    storage_error_message,
)
from fresco_guard.services.notifications import NotificationScheduler
from fresco_guard.services.profiles import UserRepository

logger = logging.getLogger(__name__)

FOOD_FILTERS: dict[str, frozenset[str]] = {
    "expiring": frozenset({EXPIRING_SOON, EXPIRED}),
    "expired": frozenset({EXPIRED}),
    "safe": frozenset({SAFE}),
}

_FOOD_STORAGE_MESSAGES = {
    MISSING_TABLE: (
        "La tabla de alimentos no existe. "
        "Por favor ejecuta el script de migración de Supabase."
    ),
    UNIQUE_VIOLATION: "Este alimento ya existe.",
}


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> FoodRecord:
        """Insert a food row and return it."""

    def list_foods(self, user_id: UUID) -> list[FoodRecord]:
        """Return every food of a user ordered by expiry date."""

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodRecord | None:
        """Return a food owned by the user."""

    def update_food(
        self, user_id: UUID, food_id: UUID, changes: dict[str, object]
    ) -> FoodRecord | None:
        """Apply column changes to a food and return the updated row."""

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete a food; return false when nothing matched."""

    def list_names_expiring_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[str]:
        """Return names of foods whose expiry date falls in [start, end]."""


@dataclass
class FoodService:
    """Creates, lists and edits the foods a user is tracking."""

    repository: FoodRepository
    users: UserRepository
    scheduler: NotificationScheduler
    timezone_name: str
    free_food_limit: int

    def create_food(  # noqa: PLR0913
        self,
        user: CurrentUser,
        name: str,
        expiry_date: date,
        category: str | None = None,
        notes: str | None = None,
        image_url: str | None = None,
        today: date | None = None,
    ) -> FoodRecord:
        """Track a new food and schedule its reminders."""
        current_day = today or local_today(self.timezone_name)
        self._check_food_limit(user)
        classification = classify_expiry(expiry_date, current_day)
        payload: dict[str, object] = {
            "name": name,
            "image_url": image_url,
            "expiry_date": expiry_date.isoformat(),
            "category": category,
            "notes": notes,
            "expiry_status": classification.status,
            "days_until_expiry": classification.days,
        }
        try:
            food = self.repository.create_food(user.id, payload)
        except StorageError as exc:
            message = storage_error_message(
                exc.code,
                exc.message or "Error al guardar el alimento",
                _FOOD_STORAGE_MESSAGES,
            )
            raise StorageError(message, code=exc.code) from exc

        try:
            self.users.increment_food_count(user.id)
        except Exception:
            logger.exception(
                "Failed to increment food count", extra={"user_id": str(user.id)}
            )

        if user.notifications_enabled:
            self.scheduler.schedule_for_food(
                food.id, food.name, food.expiry_date, user.id, today=current_day
            )
        return food

    def list_foods(
        self,
        user_id: UUID,
        status_filter: str | None = None,
        today: date | None = None,
    ) -> list[FoodRecord]:
        """Return the user's foods, optionally narrowed by expiry status."""
        current_day = today or local_today(self.timezone_name)
        foods = [
            _with_current_status(food, current_day)
            for food in self.repository.list_foods(user_id)
        ]
        statuses = FOOD_FILTERS.get(status_filter or "")
        if statuses is None:
            return foods
        return [food for food in foods if food.expiry_status in statuses]

    def get_food(
        self, user_id: UUID, food_id: UUID, today: date | None = None
    ) -> FoodRecord:
        """Return one food or raise NotFoundError."""
        food = self.repository.get_food(user_id, food_id)
        if food is None:
            raise NotFoundError("Alimento no encontrado")
        return _with_current_status(food, today or local_today(self.timezone_name))

    def update_food(
        self,
        user_id: UUID,
        food_id: UUID,
        changes: dict[str, object],
        today: date | None = None,
    ) -> FoodRecord:
        """Apply a partial update; a new expiry date re-derives the status."""
        columns = dict(changes)
        expiry_date = columns.get("expiry_date")
        if isinstance(expiry_date, date):
            classification = classify_expiry(
                expiry_date, today or local_today(self.timezone_name)
            )
            columns["expiry_date"] = expiry_date.isoformat()
            columns["expiry_status"] = classification.status
            columns["days_until_expiry"] = classification.days
        columns["updated_at"] = datetime.now(tz=UTC).isoformat()
        try:
            food = self.repository.update_food(user_id, food_id, columns)
        except StorageError as exc:
            raise StorageError(
                exc.message or "Error al actualizar el alimento", code=exc.code
            ) from exc
        if food is None:
            raise NotFoundError("Alimento no encontrado")
        return food

    def delete_food(self, user_id: UUID, food_id: UUID) -> None:
        """Delete a food and release its slot in the food counter."""
        if self.repository.get_food(user_id, food_id) is None:
            raise NotFoundError("Alimento no encontrado")
        try:
            deleted = self.repository.delete_food(user_id, food_id)
        except StorageError as exc:
            raise StorageError(
                exc.message or "Error al eliminar el alimento", code=exc.code
            ) from exc
        if not deleted:
            raise NotFoundError("Alimento no encontrado")
        try:
            self.users.decrement_food_count(user_id)
        except Exception:
            logger.exception(
                "Failed to decrement food count", extra={"user_id": str(user_id)}
            )

    def can_add_more(self, user: CurrentUser) -> bool:
        """Return whether the user's plan allows another food."""
        return user.is_premium or user.food_count < self.free_food_limit

    def _check_food_limit(self, user: CurrentUser) -> None:
        if not self.can_add_more(user):
            raise LimitReachedError(
                "Has alcanzado el límite de alimentos para el plan gratuito"
            )


def _with_current_status(food: FoodRecord, today: date) -> FoodRecord:
    classification = classify_expiry(food.expiry_date, today)
    if (
        classification.status == food.expiry_status
        and classification.days == food.days_until_expiry
    ):
        return food
    return replace(
        food,
        expiry_status=classification.status,
        days_until_expiry=classification.days,
    )


def serialize_food(food: FoodRecord) -> dict[str, object]:
    """Return the JSON shape of a food row."""
    return {
        "id": str(food.id),
        "user_id": str(food.user_id),
        "name": food.name,
        "image_url": food.image_url,
        "expiry_date": food.expiry_date.isoformat(),
        "category": food.category,
        "notes": food.notes,
        "expiry_status": food.expiry_status,
        "days_until_expiry": food.days_until_expiry,
        "created_at": food.created_at.isoformat() if food.created_at else None,
        "updated_at": food.updated_at.isoformat() if food.updated_at else None,
    }
