"""Recipe suggestion endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from fresco_guard.api.dependencies import get_request_context, require_user
from fresco_guard.api.schemas import GenerateRecipeInput, SaveRecipeInput
from fresco_guard.domain.models import CurrentUser
from fresco_guard.errors import NotAuthenticatedError
from fresco_guard.services.auth import RequestContext
from fresco_guard.services.recipes import serialize_recipe, serialize_recipe_record

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.post("/generate")
async def generate_recipe(
    payload: GenerateRecipeInput,
    request: Request,
    context: RequestContext = Depends(get_request_context),
) -> dict[str, object]:
    """Suggest a recipe for the given ingredients or owned foods."""
    container: AppContainer = request.app.state.container
    user_id = context.user.id if context.user else None
    if payload.save and user_id is None:
        raise NotAuthenticatedError()
    recipe = await container.recipe_service.generate(
        payload.ingredients,
        preferences=payload.preferences,
        food_ids=payload.parsed_food_ids(),
        user_id=user_id,
    )
    body: dict[str, object] = {"success": True, "recipe": serialize_recipe(recipe)}
    if payload.save and user_id is not None:
        record = container.recipe_service.save(user_id, recipe)
        body["saved"] = serialize_recipe_record(record)
    return body


@router.get("")
async def list_recipes(
    request: Request, user: CurrentUser = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's saved recipes, newest first."""
    container: AppContainer = request.app.state.container
    records = container.recipe_service.list_recipes(user.id)
    return {
        "success": True,
        "recipes": [serialize_recipe_record(record) for record in records],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def save_recipe(
    payload: SaveRecipeInput,
    request: Request,
    user: CurrentUser = Depends(require_user),
) -> dict[str, object]:
    """Keep a generated recipe."""
    container: AppContainer = request.app.state.container
    record = container.recipe_service.save(user.id, payload.to_recipe())
    return {"success": True, "recipe": serialize_recipe_record(record)}
