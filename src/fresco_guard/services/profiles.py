"""Profile and per-user counter logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fresco_guard.domain.models import CurrentUser, UserProfile
from fresco_guard.errors import StorageError


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user, if present."""

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        """Apply column changes and return the updated profile."""

    def email_exists(self, email: str) -> bool:
        """Return true when a profile uses the email address."""

    def set_photos_taken(self, user_id: UUID, count: int) -> None:
        """Overwrite the photo counter."""

    def increment_food_count(self, user_id: UUID) -> None:
        """Add one to the food counter."""

    def decrement_food_count(self, user_id: UUID) -> int | None:
        """Subtract one from the food counter without going below zero."""


@dataclass
class ProfileService:
    """Application service for reading and editing profiles."""

    repository: UserRepository

    def get_profile(self, user: CurrentUser) -> dict[str, object]:
        """Return the public profile of the current user."""
        return serialize_user(user)

    def update_profile(
        self,
        user: CurrentUser,
        name: str | None = None,
        notifications_enabled: bool | None = None,
    ) -> dict[str, object]:
        """Update editable profile fields."""
        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = name
        if notifications_enabled is not None:
            changes["notifications_enabled"] = notifications_enabled
        if not changes:
            return serialize_user(user)
        try:
            profile = self.repository.update_profile(user.id, changes)
        except StorageError as exc:
            raise StorageError("Error al actualizar perfil", code=exc.code) from exc
        if profile is None:
            raise StorageError("Error al actualizar perfil")
        return {
            "id": str(profile.id),
            "email": profile.email,
            "name": profile.name,
            "plan": profile.plan,
            "notificationsEnabled": profile.notifications_enabled,
        }


def serialize_user(user: CurrentUser) -> dict[str, object]:
    """Return the JSON shape used for the current user."""
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "plan": user.plan,
        "notificationsEnabled": user.notifications_enabled,
        "image": user.image,
    }
