from travel_intel.summarize.base import GenerativeClient
from travel_intel.summarize.claude import ClaudeGenerativeClient, parse_structured_output
from travel_intel.summarize.fallback import with_fallback
from travel_intel.summarize.summarizer import (
    DEFAULT_FALLBACK_MODEL,
    DEFAULT_PRIMARY_MODEL,
    INTEL_ITEMS_SCHEMA,
    Summarizer,
    build_summary_prompt,
)

__all__ = [
    "DEFAULT_FALLBACK_MODEL",
    "DEFAULT_PRIMARY_MODEL",
    "INTEL_ITEMS_SCHEMA",
    "ClaudeGenerativeClient",
    "GenerativeClient",
    "Summarizer",
    "build_summary_prompt",
    "parse_structured_output",
    "with_fallback",
]
