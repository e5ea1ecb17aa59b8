"""Web search using the Google Custom Search JSON API."""

import logging
import os

import httpx

from travel_intel.data import SearchErrorKind, SearchResponse, SearchResult
from travel_intel.errors import ConfigurationError

GOOGLE_SEARCH_API_URL = "https://www.googleapis.com/customsearch/v1"

logger = logging.getLogger(__name__)


class GoogleSearchClient:
    """Search the web with a Google Programmable Search Engine.

    Credentials are not checked at construction time so that a pipeline can
    be built before they are available; call ``ensure_configured`` to fail
    fast.

    Args:
        api_key: API key (defaults to GOOGLE_SEARCH_API_KEY env var).
        engine_id: Search engine ID (defaults to GOOGLE_SEARCH_ENGINE_ID env var).
        num_results: Results requested per query (1-10, default 5).
        timeout: HTTP timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        engine_id: str | None = None,
        num_results: int = 5,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key or os.environ.get("GOOGLE_SEARCH_API_KEY")
        self._engine_id = engine_id or os.environ.get("GOOGLE_SEARCH_ENGINE_ID")
        self._num_results = min(max(num_results, 1), 10)  # API max is 10
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._engine_id)

    def ensure_configured(self) -> None:
        if not self._api_key:
            raise ConfigurationError(
                "Google Search API key required. "
                "Pass api_key or set GOOGLE_SEARCH_API_KEY env var."
            )
        if not self._engine_id:
            raise ConfigurationError(
                "Google Search engine ID required. "
                "Pass engine_id or set GOOGLE_SEARCH_ENGINE_ID env var."
            )

    async def search(self, query: str) -> SearchResponse:
        """Search for pages matching ``query``.

        Args:
            query: Free-text query, may contain ``site:`` operators.

        Returns:
            SearchResponse; on failure ``error_kind`` tells callers why.
        """
        if not self.is_configured:
            return SearchResponse(
                success=False,
                error="Google Search API credentials are not configured.",
                error_kind=SearchErrorKind.MISSING_CREDENTIALS,
            )

        params: dict[str, str | int] = {
            "key": self._api_key,  # type: ignore[dict-item]
            "cx": self._engine_id,  # type: ignore[dict-item]
            "q": query,
            "num": self._num_results,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(GOOGLE_SEARCH_API_URL, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            return _status_error(e.response)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Web search failed. Error: %s", e)
            return SearchResponse(
                success=False,
                error=f"Failed to perform web search: {e}",
                error_kind=SearchErrorKind.FAILED,
            )

        results = [
            SearchResult(
                title=item.get("title", ""),
                link=item.get("link", ""),
                snippet=item.get("snippet", ""),
            )
            for item in data.get("items", [])
            if item.get("link")
        ]
        return SearchResponse(success=True, results=results)


def _status_error(response: httpx.Response) -> SearchResponse:
    """Map an HTTP error status from the search API to a SearchResponse."""
    message = _api_error_message(response)
    logger.warning("Web search returned HTTP %d: %s", response.status_code, message)
    if response.status_code == 403:
        return SearchResponse(
            success=False,
            error=(
                f"Permission denied by the search API ({message}). Check that the "
                "Custom Search API is enabled for this key and the engine ID is correct."
            ),
            error_kind=SearchErrorKind.FORBIDDEN,
        )
    if response.status_code == 429:
        return SearchResponse(
            success=False,
            error=f"Search API quota exceeded ({message}).",
            error_kind=SearchErrorKind.QUOTA,
        )
    return SearchResponse(
        success=False,
        error=f"Search API returned HTTP {response.status_code} ({message}).",
        error_kind=SearchErrorKind.FAILED,
    )


def _api_error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or "unknown error"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase or "unknown error"
