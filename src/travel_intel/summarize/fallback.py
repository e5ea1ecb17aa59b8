"""Primary-then-fallback model retry shared by every generative call site."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from travel_intel.trace import ExecutionTrace

T = TypeVar("T")


async def with_fallback(
    operation: Callable[[str], Awaitable[T]],
    *,
    primary_model: str,
    fallback_model: str,
    trace: ExecutionTrace,
    label: str = "[Intel]",
) -> T:
    """Run ``operation`` with the primary model, retrying once with the fallback.

    Args:
        operation: Coroutine factory taking the model ID to call.
        primary_model: Model tried first.
        fallback_model: Model tried once if the primary attempt raises.
        trace: Run trace.
        label: Prefix for trace lines.

    Returns:
        The operation's result.

    Raises:
        Exception: Whatever the fallback attempt raised.
    """
    trace.add(f"{label} Calling primary model ({primary_model})...")
    try:
        return await operation(primary_model)
    except Exception as e:
        trace.add(
            f"{label} Primary model failed: {e}. Retrying with fallback ({fallback_model})..."
        )
    return await operation(fallback_model)
