"""Core data models for travel intel."""

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class SourceScope(StrEnum):
    """Which configured source list restricts a category's search."""

    OFFICIAL = "official"
    REGIONAL = "regional"
    LOCAL = "local"


class SearchErrorKind(StrEnum):
    """Failure classes surfaced by a search client."""

    MISSING_CREDENTIALS = "missing_credentials"
    FORBIDDEN = "forbidden"
    QUOTA = "quota"
    FAILED = "failed"


@dataclass(frozen=True)
class Category:
    """One topic axis of the report, e.g. health or political unrest."""

    key: str
    topic: str
    scopes: tuple[SourceScope, ...] = ()
    description: str = ""


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(
        key="advisories",
        topic="(travel advisory OR travel warning)",
        scopes=(SourceScope.OFFICIAL,),
        description="official government travel advisories",
    ),
    Category(
        key="scams",
        topic="(tourist scams OR tourist fraud)",
        scopes=(SourceScope.LOCAL, SourceScope.REGIONAL),
        description="common scams targeting tourists",
    ),
    Category(
        key="theft",
        topic="(theft OR robbery OR kidnapping)",
        scopes=(SourceScope.LOCAL, SourceScope.REGIONAL),
        description="theft, robbery or kidnapping risks",
    ),
    Category(
        key="health",
        topic="(health risks OR disease outbreaks)",
        scopes=(SourceScope.OFFICIAL, SourceScope.LOCAL),
        description="health risks and disease outbreaks",
    ),
    Category(
        key="political",
        topic="(political unrest OR protests OR demonstrations)",
        scopes=(SourceScope.REGIONAL, SourceScope.LOCAL),
        description="the political situation, protests or unrest",
    ),
)


@dataclass(frozen=True)
class SourceLists:
    """Site allow-lists used to restrict searches, fixed for a run."""

    official: tuple[str, ...] = ()
    regional: tuple[str, ...] = ()
    local: tuple[str, ...] = ()

    def for_scope(self, scope: SourceScope) -> tuple[str, ...]:
        if scope is SourceScope.OFFICIAL:
            return self.official
        if scope is SourceScope.REGIONAL:
            return self.regional
        return self.local


@dataclass(frozen=True)
class SearchQuery:
    """A search-engine query assembled for one category."""

    category: str
    text: str


@dataclass(frozen=True)
class SearchResult:
    """A raw candidate page returned by the search service. Not yet trusted."""

    title: str
    link: str
    snippet: str = ""


@dataclass(frozen=True)
class SearchResponse:
    """Outcome of a single search call."""

    success: bool
    results: list[SearchResult] = field(default_factory=list)
    error: str | None = None
    error_kind: SearchErrorKind | None = None


@dataclass(frozen=True)
class ScrapeOutcome:
    """Outcome of fetching one candidate page.

    ``published_date`` is best effort: it may be missing or unparsable.
    """

    success: bool
    content: str | None = None
    published_date: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class VerifiedSource:
    """A page that was fetched successfully and is recent enough to summarize."""

    content: str
    url: str


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single generative call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Usage:
    """Accumulated external-service usage across a run."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    search_requests: int = 0
    scrape_requests: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            search_requests=self.search_requests + other.search_requests,
            scrape_requests=self.scrape_requests + other.scrape_requests,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.search_requests += other.search_requests
        self.scrape_requests += other.scrape_requests
        return self


class IntelItem(BaseModel):
    """One generated summary attributed to exactly one verified source."""

    summary: str = Field(
        min_length=1,
        description="A concise, one-paragraph summary of the key information from the source.",
    )
    source: str = Field(description="The URL of the source article.")

    model_config = {"frozen": True}

    @field_validator("summary")
    @classmethod
    def summary_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("summary must not be blank")
        return v

    @field_validator("source")
    @classmethod
    def source_is_http_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"source must be an http(s) URL, got {v!r}")
        return v


class IntelReport(BaseModel):
    """Full output of one pipeline run."""

    country_name: str
    categories: dict[str, list[IntelItem]] = Field(default_factory=dict)
    sources: list[str] = Field(default_factory=list)
    notice: str | None = None
    generated_at: str = ""
    usage: Usage = Field(default_factory=Usage)

    @property
    def is_empty(self) -> bool:
        return not any(self.categories.values())
