from travel_intel.query.builder import build_query, site_restriction
from travel_intel.query.sources import (
    LOCAL_NEWS_SOURCES,
    REGIONAL_NEWS_SOURCES,
    local_sources_for,
    parse_source_list,
    resolve_source_lists,
)

__all__ = [
    "LOCAL_NEWS_SOURCES",
    "REGIONAL_NEWS_SOURCES",
    "build_query",
    "local_sources_for",
    "parse_source_list",
    "resolve_source_lists",
    "site_restriction",
]
