"""Label reading endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from fresco_guard.api.schemas import OcrInput

if TYPE_CHECKING:
    from fresco_guard.containers import AppContainer

router = APIRouter(prefix="/api", tags=["ocr"])


@router.post("/ocr")
async def read_label(payload: OcrInput, request: Request) -> dict[str, object]:
    """Extract a food name and expiry date from a photo of its label."""
    container: AppContainer = request.app.state.container
    result = await container.ocr_service.read_label(payload.image or "")
    return {
        "success": True,
        "foodName": result.food_name,
        "expiryDate": result.expiry_date,
        "confidence": result.confidence,
    }
