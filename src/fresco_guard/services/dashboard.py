"""Dashboard summary of a user's pantry."""

import logging
from dataclasses import dataclass
from datetime import date

from fresco_guard.domain.expiry import (
    EXPIRED,
    EXPIRING_SOON,
    SAFE,
    ExpiryClassification,
    expiry_message,
)
from fresco_guard.domain.foods import FoodRecord
from fresco_guard.domain.models import PLAN_FREE, CurrentUser
from fresco_guard.errors import StorageError
from fresco_guard.services.foods import FoodService

logger = logging.getLogger(__name__)

EXPIRING_PREVIEW_LIMIT = 5


def empty_dashboard() -> dict[str, object]:
    """Zeroed dashboard returned to anonymous callers."""
    return {
        "stats": {
            "totalFoods": 0,
            "expiredCount": 0,
            "expiringSoonCount": 0,
            "safeCount": 0,
        },
        "expiringFoods": [],
        "userPlan": PLAN_FREE,
    }


@dataclass
class DashboardService:
    """Aggregates food counts per expiry status."""

    food_service: FoodService

    def summary(
        self, user: CurrentUser | None, today: date | None = None
    ) -> dict[str, object]:
        """Return counts, the most urgent foods and the user's plan."""
        if user is None:
            return empty_dashboard()
        try:
            foods = self.food_service.list_foods(user.id, today=today)
        except StorageError:
            logger.exception(
                "Failed to load foods for dashboard", extra={"user_id": str(user.id)}
            )
            return empty_dashboard()

        urgent = [
            food for food in foods if food.expiry_status in {EXPIRED, EXPIRING_SOON}
        ]
        return {
            "stats": {
                "totalFoods": len(foods),
                "expiredCount": _count(foods, EXPIRED),
                "expiringSoonCount": _count(foods, EXPIRING_SOON),
                "safeCount": _count(foods, SAFE),
            },
            "expiringFoods": [
                _serialize_preview(food) for food in urgent[:EXPIRING_PREVIEW_LIMIT]
            ],
            "userPlan": user.plan,
        }


def _count(foods: list[FoodRecord], status: str) -> int:
    return sum(1 for food in foods if food.expiry_status == status)


def _serialize_preview(food: FoodRecord) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "expiryDate": food.expiry_date.isoformat(),
        "daysUntilExpiry": food.days_until_expiry,
        "status": food.expiry_status,
        "label": expiry_message(
            ExpiryClassification(food.expiry_status, food.days_until_expiry)
        ),
        "category": food.category,
        "imageUrl": food.image_url,
    }
