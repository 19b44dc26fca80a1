"""Recipe suggestion service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fresco_guard.domain.foods import FoodRecord
from fresco_guard.domain.recipes import GeneratedRecipe, RecipeRecord
from fresco_guard.errors import AppError, InvalidInputError, StorageError

logger = logging.getLogger(__name__)

RECENT_RECIPES_LIMIT = 20


class RecipeGenerator(Protocol):
    """Interface for recipe generation backends."""

    async def generate(
        self, ingredients: list[str], preferences: str | None = None
    ) -> GeneratedRecipe:
        """Return a recipe that uses the given ingredients."""


class RecipeRepository(Protocol):
    """Persistence interface for saved recipes."""

    def create_recipe(self, user_id: UUID, recipe: GeneratedRecipe) -> RecipeRecord:
        """Persist a recipe and return the stored row."""

    def list_recipes(self, user_id: UUID, limit: int) -> list[RecipeRecord]:
        """Return the most recent saved recipes of a user."""


class FoodLookup(Protocol):
    """Food query used to turn food ids into ingredient names."""

    def get_food(self, user_id: UUID, food_id: UUID) -> FoodRecord | None:
        """Return a food owned by the user."""


@dataclass
class RecipeService:
    """Validates recipe requests and stores saved recipes."""

    generator: RecipeGenerator
    repository: RecipeRepository
    foods: FoodLookup

    async def generate(
        self,
        ingredients: list[str] | None,
        preferences: str | None = None,
        food_ids: list[UUID] | None = None,
        user_id: UUID | None = None,
    ) -> GeneratedRecipe:
        """Generate a recipe from ingredient names and/or owned food ids."""
        names = [name.strip() for name in ingredients or [] if name and name.strip()]
        linked: list[UUID] = []
        if food_ids and user_id is not None:
            for food_id in food_ids:
                food = self.foods.get_food(user_id, food_id)
                if food is None:
                    continue
                linked.append(food.id)
                if food.name not in names:
                    names.append(food.name)
        if not names:
            raise InvalidInputError("Se requieren ingredientes válidos")
        try:
            recipe = await self.generator.generate(names, preferences)
        except Exception as exc:
            logger.exception("Recipe generation failed")
            raise AppError("Error al generar la receta") from exc
        if linked:
            recipe = recipe.model_copy(update={"food_ids": linked})
        return recipe

    def save(self, user_id: UUID, recipe: GeneratedRecipe) -> RecipeRecord:
        """Persist a recipe for the user."""
        try:
            return self.repository.create_recipe(user_id, recipe)
        except StorageError as exc:
            raise StorageError("Error al guardar la receta", code=exc.code) from exc

    def list_recipes(
        self, user_id: UUID, limit: int = RECENT_RECIPES_LIMIT
    ) -> list[RecipeRecord]:
        """Return the user's saved recipes."""
        return self.repository.list_recipes(user_id, limit)


def serialize_recipe(recipe: GeneratedRecipe) -> dict[str, object]:
    """Return the camelCase JSON shape used by clients."""
    return {
        "title": recipe.title,
        "description": recipe.description,
        "ingredients": recipe.ingredients,
        "steps": recipe.steps,
        "cookingTime": recipe.cooking_time,
        "difficulty": recipe.difficulty,
        "foodIds": [str(food_id) for food_id in recipe.food_ids],
    }


def serialize_recipe_record(record: RecipeRecord) -> dict[str, object]:
    payload = serialize_recipe(record.recipe)
    payload["id"] = str(record.id)
    payload["createdAt"] = record.created_at.isoformat() if record.created_at else None
    return payload
