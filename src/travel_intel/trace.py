"""Append-only execution trace shared by every pipeline stage."""

import logging
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class ExecutionTrace:
    """Ordered log of human-readable pipeline decisions for one run.

    A trace is created per run and passed explicitly through the call chain.
    Category branches run as tasks on one event loop and ``add`` never awaits,
    so concurrent branches can share a trace without locking. Lines are only
    ever appended.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def add(self, message: str) -> None:
        """Append one line to the trace."""
        self._lines.append(message)
        logger.debug(message)

    def lines(self) -> list[str]:
        """Return a copy of the trace lines in insertion order."""
        return list(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lines))

    def __len__(self) -> int:
        return len(self._lines)
