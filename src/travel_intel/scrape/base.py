from typing import Protocol

from travel_intel.data import ScrapeOutcome


class ScrapeClient(Protocol):
    """Interface for fetching a page and extracting its text."""

    async def fetch(self, url: str) -> ScrapeOutcome:
        """Fetch ``url`` and extract its text content and publish date.

        Implementations report failures through the returned
        ``ScrapeOutcome`` rather than raising.
        """
        ...

    async def aclose(self) -> None:
        """Release any open connections."""
        ...
