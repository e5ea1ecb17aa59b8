"""Data models for travel intel."""

from travel_intel.data.models import (
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

__all__ = [
    "DEFAULT_CATEGORIES",
    "APICallUsage",
    "Category",
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
]
