"""Models for label reading results."""

from typing import Literal

from pydantic import BaseModel


class OcrResult(BaseModel):
    """Food name and expiry date read from a product label."""

    food_name: str | None = None
    expiry_date: str | None = None
    confidence: Literal["alta", "media", "baja"] = "baja"
