"""OpenAI Responses API client for text and structured JSON generation."""

import json
from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from nutrition_impact.services.assistant import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, model: str, store: bool, timeout_seconds: float
    ) -> "OpenAITextClient":
        """Create an OpenAI text client with a bounded request timeout."""
        client = AsyncOpenAI(
            api_key=api_key,
            timeout=httpx.Timeout(timeout_seconds, connect=5.0),
            max_retries=0,
        )
        return cls(client=client, model=model, store=store)

    async def generate_text(self, *, prompt: str, system: str | None) -> str:
        """Return the model's free-form answer."""
        response = await self.client.responses.create(
            **self._payload(prompt=prompt, system=system)
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def generate_json(
        self,
        *,
        prompt: str,
        system: str | None,
        schema: dict[str, object],
        schema_name: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload = self._payload(prompt=prompt, system=system)
        request_payload["text"] = {
            "format": {
                "type": "json_schema",
                "name": schema_name,
                "strict": True,
                "schema": schema,
            }
        }
        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()

    def _payload(self, *, prompt: str, system: str | None) -> dict[str, object]:
        payload: dict[str, object] = {
            "model": self.model,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "store": self.store,
        }
        if system:
            payload["instructions"] = system
        return payload
