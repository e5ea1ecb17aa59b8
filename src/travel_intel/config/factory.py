"""Factory functions to create components from configuration."""

from pathlib import Path

from travel_intel.config.models import (
    ClaudeGeneratorConfig,
    GoogleSearchConfig,
    HttpScraperConfig,
    IntelConfig,
    StaticSettingsConfig,
    YamlSettingsConfig,
)
from travel_intel.pipeline.intel import IntelPipeline
from travel_intel.run_logger import RunLogger
from travel_intel.scrape.http import HttpScraper
from travel_intel.search.google import GoogleSearchClient
from travel_intel.settings.store import (
    AppSettings,
    SettingsStore,
    StaticSettingsStore,
    YamlSettingsStore,
)
from travel_intel.summarize.claude import ClaudeGenerativeClient


def create_search_client(
    config: GoogleSearchConfig, *, num_results: int = 5
) -> GoogleSearchClient:
    """Create a search client from config."""
    return GoogleSearchClient(
        api_key=config.api_key,
        engine_id=config.engine_id,
        num_results=num_results,
        timeout=config.timeout,
    )


def create_scraper(config: HttpScraperConfig) -> HttpScraper:
    """Create a page scraper from config."""
    return HttpScraper(timeout=config.timeout, max_chars=config.max_chars)


def create_generator(config: ClaudeGeneratorConfig) -> ClaudeGenerativeClient:
    """Create a generative client from config."""
    return ClaudeGenerativeClient(max_tokens=config.max_tokens)


def create_settings_store(
    config: StaticSettingsConfig | YamlSettingsConfig,
) -> SettingsStore:
    """Create a settings store from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, StaticSettingsConfig):
        if config.official_sources is None:
            return StaticSettingsStore()
        return StaticSettingsStore(AppSettings(official_sources=config.official_sources))
    if isinstance(config, YamlSettingsConfig):
        return YamlSettingsStore(config.path)
    msg = f"Unknown settings config type: {type(config)}"
    raise ValueError(msg)


def create_from_config(
    config: IntelConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[IntelPipeline, RunLogger | None]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (pipeline, run_logger). run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    # A search never needs to return more results than are scraped.
    search_client = create_search_client(
        config.search, num_results=config.pipeline.max_candidates
    )

    pipeline = IntelPipeline(
        search_client=search_client,
        scrape_client=create_scraper(config.scraper),
        generative_client=create_generator(config.generator),
        settings_store=create_settings_store(config.settings),
        categories=[c.to_category() for c in config.pipeline.categories],
        max_candidates=config.pipeline.max_candidates,
        recency_days=config.pipeline.recency_days,
        primary_model=config.generator.primary_model,
        fallback_model=config.generator.fallback_model,
        run_logger=run_logger,
    )
    return (pipeline, run_logger)
