"""Supabase repository for foods."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fresco_guard.adapters.supabase_errors import (
    parse_date,
    parse_timestamp,
    storage_errors,
)
from fresco_guard.domain.foods import FoodRecord
from fresco_guard.errors import StorageError
from fresco_guard.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for food persistence."""

    client: Client

    def create_food(self, user_id: UUID, payload: dict[str, object]) -> FoodRecord:
        """Insert a food row and return it."""
        with storage_errors("Error al guardar el alimento"):
            response = (
                self.client.table("foods")
                .insert({"user_id": str(user_id), **payload})
                .execute()
            )
        if not response.data:
            raise StorageError("Error al guardar el alimento")
        return _parse_food(response.data[0])

    def list_foods(self, user_id: UUID) -> list[FoodRecord]:
        """Return every food of a user ordered by expiry date."""
        with storage_errors("Error al obtener los alimentos"):
            response = (
                self.client.table("foods")
                .select("*")
                .eq("user_id", str(user_id))
                .order("expiry_date", desc=False)
                .execute()
            )
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodRecord | None:
        """Return a food owned by the user."""
        with storage_errors("Error al obtener el alimento"):
            response = (
                self.client.table("foods")
                .select("*")
                .eq("id", str(food_id))
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def update_food(
        self, user_id: UUID, food_id: UUID, changes: dict[str, object]
    ) -> FoodRecord | None:
        """Apply column changes and return the updated row."""
        with storage_errors("Error al actualizar el alimento"):
            response = (
                self.client.table("foods")
                .update(changes)
                .eq("id", str(food_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete a food row."""
        with storage_errors("Error al eliminar el alimento"):
            response = (
                self.client.table("foods")
                .delete()
                .eq("id", str(food_id))
                .eq("user_id", str(user_id))
                .execute()
            )
        return bool(response.data)

    def list_names_expiring_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[str]:
        """Return names of foods expiring within [start, end]."""
        with storage_errors("Error al obtener los alimentos"):
            response = (
                self.client.table("foods")
                .select("name, expiry_date")
                .eq("user_id", str(user_id))
                .gte("expiry_date", start.isoformat())
                .lte("expiry_date", end.isoformat())
                .execute()
            )
        return [str(row["name"]) for row in response.data or []]


def _parse_food(row: dict[str, object]) -> FoodRecord:
    return FoodRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        image_url=row.get("image_url"),
        expiry_date=parse_date(row["expiry_date"]),
        category=row.get("category"),
        notes=row.get("notes"),
        expiry_status=str(row.get("expiry_status") or ""),
        days_until_expiry=int(row.get("days_until_expiry") or 0),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
