from travel_intel.search.base import SearchClient
from travel_intel.search.google import GoogleSearchClient

__all__ = [
    "GoogleSearchClient",
    "SearchClient",
]
