"""Page fetching and text extraction over plain HTTP."""

import logging

import httpx
from bs4 import BeautifulSoup

from travel_intel.data import ScrapeOutcome

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)

STRIP_TAGS = ["script", "style", "noscript", "iframe", "header", "footer", "nav"]

DATE_META_SELECTORS = [
    'meta[property="article:published_time"]',
    'meta[name="pubdate"]',
    'meta[name="date"]',
]

logger = logging.getLogger(__name__)


class HttpScraper:
    """Fetch pages with httpx and extract body text with BeautifulSoup.

    The underlying client is created lazily and reused across fetches; close
    it with ``aclose`` or by using the scraper as an async context manager.

    Args:
        timeout: Per-request timeout in seconds.
        max_chars: Maximum characters of extracted text to keep.
        user_agent: User-Agent header sent with each request.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_chars: int = 5000,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._timeout = timeout
        self._max_chars = max_chars
        self._user_agent = user_agent
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialized HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpScraper":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def fetch(self, url: str) -> ScrapeOutcome:
        """Fetch a page and extract its text and publish date.

        Args:
            url: Page URL.

        Returns:
            ScrapeOutcome with ``success=False`` and a readable ``error`` on
            any failure.
        """
        if not url:
            return ScrapeOutcome(success=False, error="No URL provided.")

        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            logger.warning("Error fetching URL %s: %s", url, e)
            return ScrapeOutcome(success=False, error=f"Could not fetch URL. Reason: {e}")

        if response.status_code == 403:
            return ScrapeOutcome(
                success=False,
                error="Scraping blocked by the website (403 Forbidden).",
            )
        if response.status_code == 404:
            return ScrapeOutcome(
                success=False, error="Failed to fetch the URL. Status: 404 Not Found"
            )
        if response.status_code != 200:
            return ScrapeOutcome(
                success=False,
                error=f"Failed to fetch the URL. Status: {response.status_code}",
            )

        content, published_date = extract_page(response.text)
        if not content:
            return ScrapeOutcome(
                success=False,
                error="Could not extract meaningful content from the page.",
            )

        return ScrapeOutcome(
            success=True,
            content=content[: self._max_chars],
            published_date=published_date,
        )


def extract_page(html: str) -> tuple[str, str | None]:
    """Extract whitespace-collapsed body text and a publish date from HTML.

    Returns:
        Tuple of (text, published date string or None).
    """
    soup = BeautifulSoup(html, "html.parser")
    published_date = _find_published_date(soup)

    for tag in soup(STRIP_TAGS):
        tag.decompose()

    root = soup.body or soup
    text = " ".join(root.get_text(separator=" ").split())
    return text, published_date


def _find_published_date(soup: BeautifulSoup) -> str | None:
    """Find a publish date in ``<time datetime>`` or common meta tags."""
    time_tag = soup.find("time", attrs={"datetime": True})
    if time_tag is not None:
        value = time_tag.get("datetime")
        if isinstance(value, str) and value.strip():
            return value.strip()

    for selector in DATE_META_SELECTORS:
        meta = soup.select_one(selector)
        if meta is None:
            continue
        value = meta.get("content")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
