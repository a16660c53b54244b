"""OpenAI Responses API client for meal parsing."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from intake_tracker.services.meal_parser import MealParserClient


@dataclass
class OpenAIMealParserClient(MealParserClient):
    """Meal parser client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMealParserClient":
        """Create an OpenAI meal parser client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def parse(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float | None,
        store: bool,
        instructions: str,
        prompt: str,
        image_data_url: str | None,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_parse",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if temperature is not None:
            request_payload["temperature"] = temperature

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
