"""Food tracking endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from fresco_guard.api.dependencies import require_food_user
from fresco_guard.api.schemas import FoodInput, UpdateFoodInput
from fresco_guard.domain.models import CurrentUser
from fresco_guard.services.foods import serialize_food

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("")
async def list_foods(
    request: Request,
    filter: str | None = None,  # noqa: A002
    user: CurrentUser = Depends(require_food_user),
) -> dict[str, object]:
    """List the caller's foods, optionally filtered by expiry status."""
    container: AppContainer = request.app.state.container
    foods = container.food_service.list_foods(user.id, status_filter=filter)
    return {"success": True, "foods": [serialize_food(food) for food in foods]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: FoodInput,
    request: Request,
    user: CurrentUser = Depends(require_food_user),
) -> dict[str, object]:
    """Track a new food and schedule its expiry reminders."""
    container: AppContainer = request.app.state.container
    food = container.food_service.create_food(
        user,
        name=payload.name or "",
        expiry_date=payload.expiry_date,
        category=payload.category,
        notes=payload.notes,
        image_url=payload.image_url,
    )
    return {"success": True, "food": serialize_food(food)}


@router.get("/{food_id}")
async def get_food(
    food_id: UUID,
    request: Request,
    user: CurrentUser = Depends(require_food_user),
) -> dict[str, object]:
    """Return one of the caller's foods."""
    container: AppContainer = request.app.state.container
    food = container.food_service.get_food(user.id, food_id)
    return {"success": True, "food": serialize_food(food)}


@router.put("/{food_id}")
async def update_food(
    food_id: UUID,
    payload: UpdateFoodInput,
    request: Request,
    user: CurrentUser = Depends(require_food_user),
) -> dict[str, object]:
    """Apply a partial update to a food."""
    container: AppContainer = request.app.state.container
    food = container.food_service.update_food(user.id, food_id, payload.changes())
    return {"success": True, "food": serialize_food(food)}


@router.delete("/{food_id}")
async def delete_food(
    food_id: UUID,
    request: Request,
    user: CurrentUser = Depends(require_food_user),
) -> dict[str, object]:
    """Stop tracking a food."""
    container: AppContainer = request.app.state.container
    container.food_service.delete_food(user.id, food_id)
    return {"success": True, "message": "Alimento eliminado correctamente"}
