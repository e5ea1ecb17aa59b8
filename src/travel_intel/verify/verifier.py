"""Search, fetch and recency-check candidate sources for one category."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from travel_intel.data import (
    ScrapeOutcome,
    SearchErrorKind,
    SearchQuery,
    SearchResponse,
    Usage,
    VerifiedSource,
)
from travel_intel.scrape.base import ScrapeClient
from travel_intel.search.base import SearchClient
from travel_intel.trace import ExecutionTrace

logger = logging.getLogger(__name__)

DEFAULT_MAX_CANDIDATES = 5
DEFAULT_RECENCY_THRESHOLD = timedelta(days=30)

_FAILURE_DESCRIPTIONS = {
    SearchErrorKind.MISSING_CREDENTIALS: "search credentials are missing",
    SearchErrorKind.FORBIDDEN: "search permission denied (check API enablement and engine ID)",
    SearchErrorKind.QUOTA: "search quota exceeded",
    SearchErrorKind.FAILED: "search request failed",
}


def now_utc() -> datetime:
    return datetime.now(tz=UTC)


def parse_published_date(value: str | None) -> datetime | None:
    """Parse an ISO-8601 publish date, returning None if it cannot be parsed.

    Naive timestamps are taken to be UTC.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class SourceVerifier:
    """Turn a search query into a list of verified, recent sources.

    Candidates are scraped one at a time to bound load on the sites being
    fetched. Nothing here raises: every failure is recorded in the trace and
    the affected candidate (or the whole search) is dropped.

    Args:
        search_client: Web search service.
        scrape_client: Page fetcher.
        max_candidates: Maximum search results to scrape per query.
        recency_threshold: Pages with a parsed publish date older than this are discarded.
        clock: Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        search_client: SearchClient,
        scrape_client: ScrapeClient,
        *,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
        recency_threshold: timedelta = DEFAULT_RECENCY_THRESHOLD,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        if max_candidates < 1:
            raise ValueError("max_candidates must be at least 1")
        self._search_client = search_client
        self._scrape_client = scrape_client
        self._max_candidates = max_candidates
        self._recency_threshold = recency_threshold
        self._clock = clock

    async def verify(
        self, query: SearchQuery, trace: ExecutionTrace
    ) -> tuple[list[VerifiedSource], Usage]:
        """Search for ``query`` and return the candidates that pass verification.

        Args:
            query: Query built for one category.
            trace: Run trace to record decisions in.

        Returns:
            Tuple of (verified sources in search-rank order, usage).
        """
        prefix = f"[Intel] ({query.category})"
        usage = Usage()

        trace.add(f'{prefix} Searching with query: "{query.text}"')
        try:
            response = await self._search_client.search(query.text)
        except Exception as e:
            logger.warning("Search client raised for %s: %s", query.category, e)
            response = SearchResponse(
                success=False, error=str(e), error_kind=SearchErrorKind.FAILED
            )
        usage.search_requests += 1

        if not response.success:
            kind = response.error_kind or SearchErrorKind.FAILED
            trace.add(
                f"{prefix} Search failed: {_FAILURE_DESCRIPTIONS[kind]}. "
                f"Reason: {response.error or 'unknown'}"
            )
            return ([], usage)
        if not response.results:
            trace.add(f"{prefix} Search returned no results.")
            return ([], usage)

        candidates = response.results[: self._max_candidates]
        trace.add(
            f"{prefix} Found {len(response.results)} results; "
            f"checking the first {len(candidates)}."
        )

        now = self._clock()
        verified: list[VerifiedSource] = []
        for candidate in candidates:
            url = candidate.link
            outcome = await self._fetch(url)
            usage.scrape_requests += 1

            if not outcome.success or not outcome.content:
                reason = outcome.error or "no content"
                trace.add(f"{prefix} FAILED scraping {url}. Reason: {reason}")
                continue

            published = parse_published_date(outcome.published_date)
            if published is None:
                if outcome.published_date:
                    reason = f'unparsable publish date "{outcome.published_date}"'
                else:
                    reason = "no publish date"
                trace.add(f"{prefix} WARNING {url} has {reason}; including it anyway.")
            else:
                age = now - published
                if age > self._recency_threshold:
                    trace.add(
                        f"{prefix} Discarding stale source {url} "
                        f"(published {published.date().isoformat()}, {age.days} days old)."
                    )
                    continue

            trace.add(f"{prefix} Verified {url}.")
            verified.append(VerifiedSource(content=outcome.content, url=url))

        trace.add(
            f"{prefix} Verified {len(verified)} of {len(candidates)} candidate sources."
        )
        return (verified, usage)

    async def _fetch(self, url: str) -> ScrapeOutcome:
        try:
            return await self._scrape_client.fetch(url)
        except Exception as e:
            logger.warning("Scrape client raised for %s: %s", url, e)
            return ScrapeOutcome(success=False, error=str(e))
