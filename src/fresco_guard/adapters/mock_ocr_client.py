"""Canned label readings for development without a vision backend."""

import random
from dataclasses import dataclass, field

from fresco_guard.services.ocr import OcrClient

SAMPLE_READINGS: tuple[dict[str, object], ...] = (
    {"food_name": "Leche Entera", "expiry_date": "15/02/2025", "confidence": "alta"},
    {"food_name": "Yogur Natural", "expiry_date": "20/02/2025", "confidence": "media"},
    {"food_name": "Pan Integral", "expiry_date": None, "confidence": "baja"},
    {"food_name": "Huevos", "expiry_date": "25/02/2025", "confidence": "alta"},
)


@dataclass
class MockOcrClient(OcrClient):
    """Returns one of a few sample readings regardless of the image."""

    rng: random.Random = field(default_factory=random.Random)

    async def extract(
        self, *, image_data_url: str, schema: dict[str, object], prompt: str
    ) -> dict[str, object]:
        """Return a random sample reading."""
        return dict(self.rng.choice(SAMPLE_READINGS))
