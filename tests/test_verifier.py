"""Tests for SourceVerifier."""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from travel_intel.data import (
    ScrapeOutcome,
    SearchErrorKind,
    SearchQuery,
    SearchResponse,
    SearchResult,
    VerifiedSource,
)
from travel_intel.trace import ExecutionTrace
from travel_intel.verify.verifier import SourceVerifier, parse_published_date

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)
QUERY = SearchQuery(category="health", text="(health risks OR disease outbreaks) Laos")


def _results(n: int) -> list[SearchResult]:
    return [SearchResult(title=f"R{i}", link=f"https://news.example/{i}") for i in range(1, n + 1)]


def _days_ago(days: int) -> str:
    return (NOW - timedelta(days=days)).isoformat()


def _make_verifier(
    response: SearchResponse, outcomes: dict[str, ScrapeOutcome], **kwargs
) -> tuple[SourceVerifier, MagicMock, MagicMock]:
    search = MagicMock()
    search.search = AsyncMock(return_value=response)
    scrape = MagicMock()
    scrape.fetch = AsyncMock(side_effect=lambda url: outcomes[url])
    verifier = SourceVerifier(search, scrape, clock=lambda: NOW, **kwargs)
    return verifier, search, scrape


class TestParsePublishedDate:
    def test_parses_z_suffix(self) -> None:
        assert parse_published_date("2026-10-08T09:00:00Z") == datetime(
            2026, 10, 8, 9, 0, tzinfo=UTC
        )

    def test_naive_is_utc(self) -> None:
        assert parse_published_date("2026-10-08") == datetime(2026, 10, 8, tzinfo=UTC)

    def test_unparsable(self) -> None:
        assert parse_published_date("last Tuesday") is None

    def test_missing(self) -> None:
        assert parse_published_date(None) is None
        assert parse_published_date("") is None


class TestSourceVerifier:
    async def test_mixed_candidates(self) -> None:
        results = _results(5)
        outcomes = {
            results[0].link: ScrapeOutcome(
                success=True, content="one", published_date=_days_ago(10)
            ),
            results[1].link: ScrapeOutcome(success=False, error="403 Forbidden"),
            results[2].link: ScrapeOutcome(
                success=True, content="three", published_date=_days_ago(40)
            ),
            results[3].link: ScrapeOutcome(success=False, error="timed out"),
            results[4].link: ScrapeOutcome(
                success=True, content="five", published_date=_days_ago(5)
            ),
        }
        verifier, _, scrape = _make_verifier(
            SearchResponse(success=True, results=results), outcomes
        )
        trace = ExecutionTrace()

        sources, usage = await verifier.verify(QUERY, trace)

        assert sources == [
            VerifiedSource(content="one", url="https://news.example/1"),
            VerifiedSource(content="five", url="https://news.example/5"),
        ]
        assert scrape.fetch.await_count == 5
        assert usage.search_requests == 1
        assert usage.scrape_requests == 5

        lines = trace.lines()
        assert any("FAILED scraping https://news.example/2" in line for line in lines)
        assert any("FAILED scraping https://news.example/4" in line for line in lines)
        assert any("Discarding stale source https://news.example/3" in line for line in lines)
        assert lines[-1] == "[Intel] (health) Verified 2 of 5 candidate sources."

    async def test_caps_candidates(self) -> None:
        results = _results(8)
        outcomes = {
            r.link: ScrapeOutcome(success=True, content=r.title, published_date=_days_ago(1))
            for r in results
        }
        verifier, _, scrape = _make_verifier(
            SearchResponse(success=True, results=results), outcomes, max_candidates=3
        )

        sources, usage = await verifier.verify(QUERY, ExecutionTrace())

        assert [s.url for s in sources] == [r.link for r in results[:3]]
        assert scrape.fetch.await_count == 3
        assert usage.scrape_requests == 3

    async def test_missing_or_unparsable_date_is_included(self) -> None:
        results = _results(2)
        outcomes = {
            results[0].link: ScrapeOutcome(success=True, content="a"),
            results[1].link: ScrapeOutcome(
                success=True, content="b", published_date="yesterday-ish"
            ),
        }
        verifier, _, _ = _make_verifier(SearchResponse(success=True, results=results), outcomes)
        trace = ExecutionTrace()

        sources, _ = await verifier.verify(QUERY, trace)

        assert [s.url for s in sources] == [r.link for r in results]
        warnings = [line for line in trace if "WARNING" in line]
        assert len(warnings) == 2
        assert "no publish date" in warnings[0]
        assert "unparsable publish date" in warnings[1]

    async def test_date_exactly_at_threshold_is_kept(self) -> None:
        results = _results(1)
        outcomes = {
            results[0].link: ScrapeOutcome(
                success=True, content="x", published_date=_days_ago(30)
            )
        }
        verifier, _, _ = _make_verifier(SearchResponse(success=True, results=results), outcomes)
        sources, _ = await verifier.verify(QUERY, ExecutionTrace())
        assert len(sources) == 1

    @pytest.mark.parametrize(
        ("kind", "fragment"),
        [
            (SearchErrorKind.MISSING_CREDENTIALS, "credentials are missing"),
            (SearchErrorKind.FORBIDDEN, "permission denied"),
            (SearchErrorKind.QUOTA, "quota exceeded"),
            (SearchErrorKind.FAILED, "request failed"),
        ],
    )
    async def test_search_failure_is_traced(self, kind: SearchErrorKind, fragment: str) -> None:
        verifier, _, scrape = _make_verifier(
            SearchResponse(success=False, error="boom", error_kind=kind), {}
        )
        trace = ExecutionTrace()

        sources, usage = await verifier.verify(QUERY, trace)

        assert sources == []
        assert usage.search_requests == 1
        scrape.fetch.assert_not_called()
        assert fragment in trace.lines()[-1]
        assert "Reason: boom" in trace.lines()[-1]

    async def test_no_results(self) -> None:
        verifier, _, scrape = _make_verifier(SearchResponse(success=True, results=[]), {})
        trace = ExecutionTrace()

        sources, _ = await verifier.verify(QUERY, trace)

        assert sources == []
        scrape.fetch.assert_not_called()
        assert trace.lines()[-1] == "[Intel] (health) Search returned no results."

    async def test_search_exception_is_contained(self) -> None:
        search = MagicMock()
        search.search = AsyncMock(side_effect=RuntimeError("network down"))
        verifier = SourceVerifier(search, MagicMock(), clock=lambda: NOW)
        trace = ExecutionTrace()

        sources, _ = await verifier.verify(QUERY, trace)

        assert sources == []
        assert "network down" in trace.lines()[-1]

    async def test_scrape_exception_is_contained(self) -> None:
        results = _results(2)
        search = MagicMock()
        search.search = AsyncMock(return_value=SearchResponse(success=True, results=results))
        scrape = MagicMock()
        scrape.fetch = AsyncMock(
            side_effect=[
                RuntimeError("parser exploded"),
                ScrapeOutcome(success=True, content="ok", published_date=_days_ago(2)),
            ]
        )
        verifier = SourceVerifier(search, scrape, clock=lambda: NOW)
        trace = ExecutionTrace()

        sources, _ = await verifier.verify(QUERY, trace)

        assert [s.url for s in sources] == [results[1].link]
        assert any("parser exploded" in line for line in trace)

    async def test_scrapes_one_candidate_at_a_time(self) -> None:
        results = _results(4)
        search = MagicMock()
        search.search = AsyncMock(return_value=SearchResponse(success=True, results=results))
        in_flight = 0
        peak = 0

        async def fetch(url: str) -> ScrapeOutcome:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return ScrapeOutcome(success=True, content=url, published_date=_days_ago(1))

        scrape = MagicMock()
        scrape.fetch = AsyncMock(side_effect=fetch)
        verifier = SourceVerifier(search, scrape, clock=lambda: NOW)

        sources, _ = await verifier.verify(QUERY, ExecutionTrace())

        assert len(sources) == 4
        assert scrape.fetch.await_count == 4
        assert peak == 1

    def test_rejects_zero_candidates(self) -> None:
        with pytest.raises(ValueError):
            SourceVerifier(MagicMock(), MagicMock(), max_candidates=0)
