"""Label reading service for the camera flow."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from fresco_guard.domain.ocr import OcrResult
from fresco_guard.errors import AppError, InvalidInputError

logger = logging.getLogger(__name__)

OCR_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "food_name": {"anyOf": [{"type": "string"}, {"type": "null"}]},
        "expiry_date": {
            "anyOf": [{"type": "string"}, {"type": "null"}],
            "description": "Expiry date printed on the label, formatted DD/MM/YYYY.",
        },
        "confidence": {"type": "string", "enum": ["alta", "media", "baja"]},
    },
    "required": ["food_name", "expiry_date", "confidence"],
    "additionalProperties": False,
}

OCR_PROMPT = (
    "Read the product label in the image. "
    "Return the food name in Spanish, the printed expiry or best-before date "
    "as DD/MM/YYYY (null when no date is visible), "
    "and your confidence as alta, media or baja."
)


class OcrClient(Protocol):
    """Interface for label reading backends."""

    async def extract(
        self, *, image_data_url: str, schema: dict[str, object], prompt: str
    ) -> dict[str, object]:
        """Return structured label data."""


@dataclass
class OcrService:
    """Normalizes uploaded images and validates label readings."""

    client: OcrClient

    async def read_label(self, image: str) -> OcrResult:
        """Read food name and expiry date from an uploaded image."""
        data_url = _normalize_image(image)
        try:
            raw = await self.client.extract(
                image_data_url=data_url, schema=OCR_SCHEMA, prompt=OCR_PROMPT
            )
            return OcrResult.model_validate(raw)
        except Exception as exc:
            logger.exception("Label reading failed")
            raise AppError("Error al procesar la imagen") from exc


def _normalize_image(image: str) -> str:
    """Accept a data URL or bare base64 and return a data URL."""
    cleaned = image.strip()
    if cleaned.startswith("data:"):
        return cleaned
    try:
        image_bytes = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("Imagen inválida") from exc
    return _to_data_url(image_bytes)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
