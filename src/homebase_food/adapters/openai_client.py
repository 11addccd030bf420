"""OpenAI Responses API client for structured outputs."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from homebase_food.services.llm import LanguageModelClient


@dataclass
class OpenAIResponsesClient(LanguageModelClient):
    """Language model client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIResponsesClient":
        """Create an OpenAI client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        text: str | None = None,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Call the Responses API with a strict JSON schema."""
        content: list[dict[str, object]] = []
        if image_data_url:
            content.append(
                {"type": "input_image", "image_url": image_data_url, "detail": "high"}
            )
        if text:
            content.append({"type": "input_text", "text": text})

        request_payload: dict[str, object] = {
            "model": model,
            "instructions": prompt,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}
        else:
            request_payload["temperature"] = 0

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)
