from travel_intel.verify.verifier import (
    DEFAULT_MAX_CANDIDATES,
    DEFAULT_RECENCY_THRESHOLD,
    SourceVerifier,
    parse_published_date,
)

__all__ = [
    "DEFAULT_MAX_CANDIDATES",
    "DEFAULT_RECENCY_THRESHOLD",
    "SourceVerifier",
    "parse_published_date",
]
