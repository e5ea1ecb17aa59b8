"""Concurrent per-category intel pipeline."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from travel_intel.data import (
    DEFAULT_CATEGORIES,
    Category,
    IntelItem,
    IntelReport,
    SourceLists,
    Usage,
)
from travel_intel.errors import GenerationError
from travel_intel.query.builder import build_query
from travel_intel.query.sources import resolve_source_lists
from travel_intel.run_logger import RunLogger, RunRecord
from travel_intel.scrape.base import ScrapeClient
from travel_intel.search.base import SearchClient
from travel_intel.settings.store import AppSettings, SettingsStore
from travel_intel.summarize.base import GenerativeClient
from travel_intel.summarize.summarizer import (
    DEFAULT_FALLBACK_MODEL,
    DEFAULT_PRIMARY_MODEL,
    Summarizer,
)
from travel_intel.trace import ExecutionTrace
from travel_intel.verify.verifier import DEFAULT_MAX_CANDIDATES, SourceVerifier

logger = logging.getLogger(__name__)

NO_SIGNIFICANT_INFORMATION = (
    "No significant recent travel safety information was found for this country."
)


@dataclass
class CategoryOutcome:
    """Result of one category branch."""

    key: str
    items: list[IntelItem] = field(default_factory=list)
    verified_urls: list[str] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)


class IntelPipeline:
    """Build a travel intel report for a country, one concurrent branch per category.

    Flow per category: build query -> search and verify sources -> summarize
    (skipped when nothing was verified). Branches share only the run trace
    and read-only configuration. A failing branch degrades to an empty
    category; the only error that aborts a run is missing search
    configuration, checked before any I/O.

    Args:
        search_client: Web search service.
        scrape_client: Page fetcher.
        generative_client: Generative-text service.
        settings_store: Source of the official source list.
        categories: Categories to report on.
        max_candidates: Search results scraped per category.
        recency_days: Maximum age of a source with a known publish date.
        primary_model: Model tried first for summaries.
        fallback_model: Model tried once if the primary fails.
        run_logger: Optional RunLogger for intermediate result logging.
    """

    def __init__(
        self,
        search_client: SearchClient,
        scrape_client: ScrapeClient,
        generative_client: GenerativeClient,
        settings_store: SettingsStore,
        *,
        categories: tuple[Category, ...] | list[Category] = DEFAULT_CATEGORIES,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
        recency_days: int = 30,
        primary_model: str = DEFAULT_PRIMARY_MODEL,
        fallback_model: str = DEFAULT_FALLBACK_MODEL,
        run_logger: RunLogger | None = None,
    ) -> None:
        keys = [c.key for c in categories]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate category keys: {keys}")
        self._search_client = search_client
        self._scrape_client = scrape_client
        self._settings_store = settings_store
        self._categories = tuple(categories)
        self._verifier = SourceVerifier(
            search_client,
            scrape_client,
            max_candidates=max_candidates,
            recency_threshold=timedelta(days=recency_days),
        )
        self._summarizer = Summarizer(
            generative_client,
            primary_model=primary_model,
            fallback_model=fallback_model,
        )
        self._run_logger = run_logger

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    async def aclose(self) -> None:
        """Release the scrape client's connections."""
        await self._scrape_client.aclose()

    async def run(self, country_name: str) -> tuple[IntelReport, list[str]]:
        """Execute the pipeline for one country.

        Args:
            country_name: Country to report on.

        Returns:
            Tuple of (report, execution trace lines).

        Raises:
            ValueError: If ``country_name`` is blank.
            ConfigurationError: If the search service is not configured.
        """
        if not isinstance(country_name, str) or not country_name.strip():
            raise ValueError("country_name must be a non-empty string")
        country_name = " ".join(country_name.split())

        self._search_client.ensure_configured()

        trace = ExecutionTrace()
        trace.add(f"[Intel] Starting intel run for: {country_name}")
        record = self._run_logger.start_run(country_name) if self._run_logger else None

        settings = await self._load_settings(trace)
        source_lists = resolve_source_lists(country_name, settings.official_sources)
        if not source_lists.local:
            trace.add(f"[Intel] No local news sources catalogued for {country_name}.")

        tasks = [
            self._run_category(category, country_name, source_lists, trace, record)
            for category in self._categories
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes: list[CategoryOutcome] = []
        for category, result in zip(self._categories, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"Error in category {category.key}: {str(result)}")
                trace.add(f"[Intel] ({category.key}) Category failed unexpectedly: {result}")
                outcomes.append(CategoryOutcome(key=category.key))
                continue
            outcomes.append(result)

        total_usage = Usage()
        for outcome in outcomes:
            total_usage += outcome.usage

        if not any(outcome.verified_urls for outcome in outcomes):
            trace.add(
                "[Intel] No verified sources in any category. "
                "Returning the neutral default report."
            )
            report = self._neutral_report(country_name, total_usage)
        else:
            report = self._merge(country_name, outcomes, total_usage)

        trace.add("[Intel] All categories processed. Run finished.")
        lines = trace.lines()
        if self._run_logger:
            self._run_logger.finish_run(record, report, lines)
        return (report, lines)

    async def _load_settings(self, trace: ExecutionTrace) -> AppSettings:
        """Read settings once for the run, degrading to defaults on failure."""
        try:
            return await self._settings_store.get()
        except Exception as e:
            logger.warning("Failed to read settings, using defaults. Error: %s", e)
            trace.add(f"[Intel] Could not read settings ({e}); using default official sources.")
            return AppSettings()

    async def _run_category(
        self,
        category: Category,
        country_name: str,
        source_lists: SourceLists,
        trace: ExecutionTrace,
        record: RunRecord | None,
    ) -> CategoryOutcome:
        prefix = f"[Intel] ({category.key})"
        trace.add(f"{prefix} Starting category.")
        outcome = CategoryOutcome(key=category.key)

        query = build_query(category, country_name, source_lists)

        t0 = time.monotonic()
        sources, verify_usage = await self._verifier.verify(query, trace)
        outcome.usage += verify_usage
        outcome.verified_urls = [source.url for source in sources]
        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage="search_verify",
                component=category.key,
                input_data=query,
                output_data=outcome.verified_urls,
                usage=verify_usage,
                duration_seconds=time.monotonic() - t0,
            )

        if not sources:
            trace.add(f"{prefix} No verified sources. Skipping AI summarization.")
            return outcome

        t0 = time.monotonic()
        try:
            items, summary_usage = await self._summarizer.summarize(
                category, country_name, sources, trace
            )
        except Exception as e:
            if isinstance(e, GenerationError):
                outcome.usage += e.usage
            logger.warning(f"Summarization failed for {category.key}: {str(e)}")
            trace.add(f"{prefix} Summarization failed on both models: {e}. No summary available.")
            return outcome

        outcome.items = items
        outcome.usage += summary_usage
        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage="summarize",
                component=category.key,
                input_data=outcome.verified_urls,
                output_data=items,
                usage=summary_usage,
                duration_seconds=time.monotonic() - t0,
            )
        return outcome

    def _neutral_report(self, country_name: str, usage: Usage) -> IntelReport:
        return IntelReport(
            country_name=country_name,
            categories={category.key: [] for category in self._categories},
            sources=[],
            notice=NO_SIGNIFICANT_INFORMATION,
            generated_at=datetime.now(tz=UTC).isoformat(),
            usage=usage,
        )

    def _merge(
        self, country_name: str, outcomes: list[CategoryOutcome], usage: Usage
    ) -> IntelReport:
        categories: dict[str, list[IntelItem]] = {}
        seen_urls: set[str] = set()
        sources: list[str] = []
        for outcome in outcomes:
            categories[outcome.key] = outcome.items
            for item in outcome.items:
                if item.source not in seen_urls:
                    seen_urls.add(item.source)
                    sources.append(item.source)

        return IntelReport(
            country_name=country_name,
            categories=categories,
            sources=sources,
            generated_at=datetime.now(tz=UTC).isoformat(),
            usage=usage,
        )


async def run_intel(pipeline: IntelPipeline, country_name: str) -> dict[str, Any]:
    """Run ``pipeline`` and return the report and trace as serializable data."""
    report, trace = await pipeline.run(country_name)
    return {"report": report.model_dump(mode="json"), "trace": trace}
