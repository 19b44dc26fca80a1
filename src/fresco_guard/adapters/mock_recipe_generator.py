"""Template-based recipe generator used until a language model is wired in."""

import random
from dataclasses import dataclass, field

from fresco_guard.domain.recipes import GeneratedRecipe
from fresco_guard.services.recipes import RecipeGenerator

DEFAULT_COOKING_TIME = 30
DEFAULT_DIFFICULTY = "Fácil"


@dataclass
class MockRecipeGenerator(RecipeGenerator):
    """Builds a plausible recipe from the ingredient names alone."""

    rng: random.Random = field(default_factory=random.Random)

    async def generate(
        self, ingredients: list[str], preferences: str | None = None
    ) -> GeneratedRecipe:
        """Return a recipe built from fixed templates."""
        if not ingredients:
            raise ValueError("At least one ingredient is required")
        first = ingredients[0]
        titles = [
            f"Ensalada creativa con {' y '.join(ingredients[:2])}",
            f"Sofrito especial de {first}",
            f"Plato combinado con {', '.join(ingredients)}",
            f"Receta rápida con {first}",
        ]
        descriptions = [
            "Una deliciosa combinación de ingredientes frescos que aprovecha "
            f"al máximo {first}",
            "Receta fácil y rápida para usar tus ingredientes antes de que se venzan",
            f"Una forma creativa de combinar {len(ingredients)} ingredientes "
            "en un plato delicioso",
        ]
        return GeneratedRecipe(
            title=self.rng.choice(titles),
            description=self.rng.choice(descriptions),
            ingredients=[
                f"{name} (cantidad según disponibilidad)" for name in ingredients
            ],
            steps=[
                f"Preparar {first} cortándolo en trozos",
                "Cocinar los ingredientes principales a fuego medio",
                "Agregar condimentos al gusto",
                "Servir caliente y disfrutar",
            ],
            cooking_time=DEFAULT_COOKING_TIME,
            difficulty=DEFAULT_DIFFICULTY,
        )
