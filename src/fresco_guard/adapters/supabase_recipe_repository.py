"""Supabase repository for saved recipes."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fresco_guard.adapters.supabase_errors import parse_timestamp, storage_errors
from fresco_guard.domain.recipes import GeneratedRecipe, RecipeRecord
from fresco_guard.errors import StorageError
from fresco_guard.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for the recipes table."""

    client: Client

    def create_recipe(self, user_id: UUID, recipe: GeneratedRecipe) -> RecipeRecord:
        """Persist a recipe and return the stored row."""
        with storage_errors("Error al guardar la receta"):
            response = (
                self.client.table("recipes")
                .insert(
                    {
                        "user_id": str(user_id),
                        "title": recipe.title,
                        "description": recipe.description,
                        "ingredients": recipe.ingredients,
                        "steps": recipe.steps,
                        "cooking_time": recipe.cooking_time,
                        "difficulty": recipe.difficulty,
                        "food_ids": [str(food_id) for food_id in recipe.food_ids],
                    }
                )
                .execute()
            )
        if not response.data:
            raise StorageError("Error al guardar la receta")
        return _parse_recipe(response.data[0])

    def list_recipes(self, user_id: UUID, limit: int) -> list[RecipeRecord]:
        """Return the most recent saved recipes."""
        with storage_errors("Error al obtener las recetas"):
            response = (
                self.client.table("recipes")
                .select("*")
                .eq("user_id", str(user_id))
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        return [_parse_recipe(row) for row in response.data or []]


def _parse_recipe(row: dict[str, object]) -> RecipeRecord:
    return RecipeRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        recipe=GeneratedRecipe(
            title=str(row.get("title", "")),
            description=str(row.get("description") or ""),
            ingredients=list(row.get("ingredients") or []),
            steps=list(row.get("steps") or []),
            cooking_time=row.get("cooking_time"),
            difficulty=row.get("difficulty"),
            food_ids=[UUID(str(value)) for value in row.get("food_ids") or []],
        ),
        created_at=parse_timestamp(row.get("created_at")),
    )
