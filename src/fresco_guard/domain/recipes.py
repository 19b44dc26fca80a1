"""Models for generated recipes."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class GeneratedRecipe(BaseModel):
    """Structured recipe suggestion."""

    title: str
    description: str
    ingredients: list[str]
    steps: list[str]
    cooking_time: int | None = Field(default=None, ge=0)
    difficulty: str | None = None
    food_ids: list[UUID] = Field(default_factory=list)


@dataclass(frozen=True)
class RecipeRecord:
    """A recipe saved by a user."""

    id: UUID
    user_id: UUID
    recipe: GeneratedRecipe
    created_at: datetime | None
