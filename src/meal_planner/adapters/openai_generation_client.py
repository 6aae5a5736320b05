"""OpenAI Responses API client for JSON-mode generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError, RateLimitError

from meal_planner.domain.errors import GenerationError
from meal_planner.services.generation import (
    GENERATION_FAILED_MESSAGE,
    RATE_LIMIT_MESSAGE,
    TextGenerationClient,
)


@dataclass
class OpenAIGenerationClient(TextGenerationClient):
    """Generation client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIGenerationClient":
        """Create an OpenAI generation client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Call the Responses API in JSON mode and return the output text."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": system_instruction,
            "input": prompt,
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
            "text": {"format": {"type": "json_object"}},
        }
        try:
            response = await self.client.responses.create(**request_payload)
        except RateLimitError as exc:
            raise GenerationError(RATE_LIMIT_MESSAGE) from exc
        except OpenAIError as exc:
            raise GenerationError(GENERATION_FAILED_MESSAGE) from exc
        output_text = response.output_text
        if not output_text:
            raise GenerationError(GENERATION_FAILED_MESSAGE)
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
