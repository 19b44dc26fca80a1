"""OpenAI Responses API client for label reading."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from fresco_guard.services.ocr import OcrClient


@dataclass
class OpenAIOcrClient(OcrClient):
    """Label reader backed by OpenAI structured outputs."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIOcrClient":
        """Create an OpenAI label reader."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def extract(
        self, *, image_data_url: str, schema: dict[str, object], prompt: str
    ) -> dict[str, object]:
        """Send the image with a JSON schema and parse the reply."""
        response = await self.client.responses.create(
            model=self.model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "label_reading",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Release the underlying HTTP connections."""
        await self.client.close()
