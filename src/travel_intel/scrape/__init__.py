from travel_intel.scrape.base import ScrapeClient
from travel_intel.scrape.http import HttpScraper, extract_page

__all__ = [
    "HttpScraper",
    "ScrapeClient",
    "extract_page",
]
