from typing import Protocol

from travel_intel.data import SearchResponse


class SearchClient(Protocol):
    """Interface for the web search service."""

    def ensure_configured(self) -> None:
        """Raise ``ConfigurationError`` if credentials or search scope are missing."""
        ...

    async def search(self, query: str) -> SearchResponse:
        """Run one search.

        Implementations report failures through the returned
        ``SearchResponse`` rather than raising.

        Args:
            query: Free-text query string.

        Returns:
            The search outcome.
        """
        ...
