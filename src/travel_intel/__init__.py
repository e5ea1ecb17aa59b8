"""Travel Intel: recent, source-attributed travel safety reports per country."""

from travel_intel.config import IntelConfig, create_from_config, load_config
from travel_intel.data import (
    DEFAULT_CATEGORIES,
    APICallUsage,
    Category,
    IntelItem,
    IntelReport,
    ScrapeOutcome,
    SearchErrorKind,
    SearchQuery,
    SearchResponse,
    SearchResult,
    SourceLists,
    SourceScope,
    Usage,
    VerifiedSource,
)
from travel_intel.errors import ConfigurationError, GenerationError, IntelError
from travel_intel.pipeline.base import Pipeline
from travel_intel.pipeline.intel import NO_SIGNIFICANT_INFORMATION, IntelPipeline, run_intel
from travel_intel.query.builder import build_query
from travel_intel.query.sources import resolve_source_lists
from travel_intel.run_logger import RunLogger
from travel_intel.scrape.base import ScrapeClient
from travel_intel.scrape.http import HttpScraper
from travel_intel.search.base import SearchClient
from travel_intel.search.google import GoogleSearchClient
from travel_intel.settings.store import (
    AppSettings,
    SettingsStore,
    StaticSettingsStore,
    YamlSettingsStore,
)
from travel_intel.summarize.base import GenerativeClient
from travel_intel.summarize.claude import ClaudeGenerativeClient
from travel_intel.summarize.fallback import with_fallback
from travel_intel.summarize.summarizer import Summarizer
from travel_intel.trace import ExecutionTrace
from travel_intel.verify.verifier import SourceVerifier

__all__ = [
    # Models
    "APICallUsage",
    "Category",
    "DEFAULT_CATEGORIES",
    "IntelItem",
    "IntelReport",
    "ScrapeOutcome",
    "SearchErrorKind",
    "SearchQuery",
    "SearchResponse",
    "SearchResult",
    "SourceLists",
    "SourceScope",
    "Usage",
    "VerifiedSource",
    # Errors
    "ConfigurationError",
    "GenerationError",
    "IntelError",
    # Protocols
    "GenerativeClient",
    "Pipeline",
    "ScrapeClient",
    "SearchClient",
    "SettingsStore",
    # Collaborators
    "ClaudeGenerativeClient",
    "GoogleSearchClient",
    "HttpScraper",
    "StaticSettingsStore",
    "YamlSettingsStore",
    "AppSettings",
    # Pipeline stages
    "ExecutionTrace",
    "SourceVerifier",
    "Summarizer",
    "build_query",
    "resolve_source_lists",
    "with_fallback",
    # Pipelines
    "IntelPipeline",
    "NO_SIGNIFICANT_INFORMATION",
    "run_intel",
    # Logging
    "RunLogger",
    # Config
    "IntelConfig",
    "create_from_config",
    "load_config",
]
