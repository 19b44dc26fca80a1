"""Supabase-backed user profile repository."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client, PostgrestAPIError

from fresco_guard.adapters.supabase_errors import storage_errors
from fresco_guard.domain.models import PLAN_FREE, UserProfile
from fresco_guard.services.profiles import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for the users table."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        with storage_errors("Error al obtener el perfil"):
            response = (
                self.client.table("users")
                .select("*")
                .eq("id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        """Apply column changes and return the updated profile."""
        with storage_errors("Error al actualizar perfil"):
            response = (
                self.client.table("users")
                .update(changes)
                .eq("id", str(user_id))
                .execute()
            )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def email_exists(self, email: str) -> bool:
        """Return true when a profile uses the email address."""
        with storage_errors("Error al verificar el correo"):
            response = (
                self.client.table("users")
                .select("email")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        return bool(response.data)

    def set_photos_taken(self, user_id: UUID, count: int) -> None:
        """Overwrite the photo counter."""
        with storage_errors("Error al actualizar el conteo de fotos"):
            self.client.table("users").update({"photos_taken": count}).eq(
                "id", str(user_id)
            ).execute()

    def increment_food_count(self, user_id: UUID) -> None:
        """Add one to the food counter using the atomic RPC when available."""
        try:
            self.client.rpc(
                "increment_food_count", {"user_id_param": str(user_id)}
            ).execute()
            return
        except PostgrestAPIError as exc:
            logger.warning(
                "RPC increment_food_count unavailable, updating manually: %s",
                exc.message,
            )
        current = self._read_food_count(user_id)
        if current is None:
            return
        self._write_food_count(user_id, current + 1)

    def decrement_food_count(self, user_id: UUID) -> int | None:
        """Subtract one from the food counter, floored at zero."""
        current = self._read_food_count(user_id)
        if current is None:
            return None
        new_count = max(0, current - 1)
        self._write_food_count(user_id, new_count)
        return new_count

    def _read_food_count(self, user_id: UUID) -> int | None:
        with storage_errors("Error al obtener el conteo de alimentos"):
            response = (
                self.client.table("users")
                .select("food_count")
                .eq("id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return int(response.data[0].get("food_count") or 0)

    def _write_food_count(self, user_id: UUID, count: int) -> None:
        with storage_errors("Error al actualizar el conteo de alimentos"):
            self.client.table("users").update({"food_count": count}).eq(
                "id", str(user_id)
            ).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    notifications_enabled = row.get("notifications_enabled")
    return UserProfile(
        id=UUID(str(row["id"])),
        email=row.get("email"),
        name=row.get("name"),
        image=row.get("image"),
        plan=str(row.get("plan") or PLAN_FREE),
        notifications_enabled=(
            True if notifications_enabled is None else bool(notifications_enabled)
        ),
        photos_taken=int(row.get("photos_taken") or 0),
        food_count=int(row.get("food_count") or 0),
    )
