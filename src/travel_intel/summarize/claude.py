"""Structured generation with Anthropic's Claude API."""

import json
import logging
import os
from typing import TypeVar

import anthropic
from pydantic import TypeAdapter, ValidationError

from travel_intel.data import APICallUsage, Usage
from travel_intel.errors import GenerationError

T = TypeVar("T")

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert travel intelligence analyst. Respond ONLY with JSON that \
validates against the following JSON Schema (no markdown fences, no \
commentary):

{schema}\
"""


class ClaudeGenerativeClient:
    """Generate schema-validated JSON with Claude.

    Args:
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Maximum output tokens per call.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        max_tokens: int = 4096,
    ) -> None:
        resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
        self._client = anthropic.AsyncAnthropic(api_key=resolved_key)
        self._max_tokens = max_tokens

    async def generate(
        self, prompt: str, schema: TypeAdapter[T], *, model: str
    ) -> tuple[T, Usage]:
        system = SYSTEM_PROMPT.format(schema=json.dumps(schema.json_schema(), indent=2))
        response = await self._client.messages.create(
            model=model,
            max_tokens=self._max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )

        usage = Usage(
            api_calls=[
                APICallUsage(
                    model=model,
                    input_tokens=response.usage.input_tokens,
                    output_tokens=response.usage.output_tokens,
                ),
            ],
        )

        response_text = ""
        for block in response.content:
            if hasattr(block, "text"):
                response_text += block.text

        try:
            parsed = parse_structured_output(response_text, schema)
        except GenerationError as e:
            e.usage += usage
            raise
        return (parsed, usage)


def strip_code_fences(text: str) -> str:
    """Remove surrounding markdown code fences from a model response."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines).strip()
    return cleaned


def parse_structured_output(text: str, schema: TypeAdapter[T]) -> T:
    """Parse a JSON response and validate it against ``schema``.

    Raises:
        GenerationError: If the response is empty, not JSON, or does not match.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise GenerationError("Model returned an empty response")

    try:
        raw = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse model JSON: %s", e)
        raise GenerationError(f"Model returned invalid JSON: {e}") from e

    try:
        return schema.validate_python(raw)
    except ValidationError as e:
        raise GenerationError(f"Model output did not match schema: {e}") from e
