from typing import Protocol, TypeVar

from pydantic import TypeAdapter

from travel_intel.data import Usage

T = TypeVar("T")


class GenerativeClient(Protocol):
    """Interface for a generative-text service that returns structured output."""

    async def generate(
        self, prompt: str, schema: TypeAdapter[T], *, model: str
    ) -> tuple[T, Usage]:
        """Generate output for ``prompt`` validated against ``schema``.

        Args:
            prompt: Full user prompt.
            schema: Pydantic adapter for the expected output type.
            model: Model ID to call.

        Returns:
            Tuple of (validated output, usage).

        Raises:
            Exception: On any failure, including output that does not match ``schema``.
        """
        ...
