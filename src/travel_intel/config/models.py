"""Pydantic configuration models for travel intel components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from travel_intel.data import DEFAULT_CATEGORIES, Category, SourceScope
from travel_intel.summarize.summarizer import DEFAULT_FALLBACK_MODEL, DEFAULT_PRIMARY_MODEL

# ============================================================
# Collaborator Configs
# ============================================================


class GoogleSearchConfig(BaseModel):
    """Configuration for GoogleSearchClient.

    Credentials normally come from the environment; set them here only for
    local experiments.
    """

    type: Literal["google"] = "google"
    api_key: str | None = None
    engine_id: str | None = None
    timeout: float = 30.0

    model_config = {"frozen": True}


class HttpScraperConfig(BaseModel):
    """Configuration for HttpScraper."""

    type: Literal["http"] = "http"
    timeout: float = 10.0
    max_chars: int = Field(default=5000, gt=0)

    model_config = {"frozen": True}


class ClaudeGeneratorConfig(BaseModel):
    """Configuration for ClaudeGenerativeClient and the summarizer models."""

    type: Literal["claude"] = "claude"
    primary_model: str = DEFAULT_PRIMARY_MODEL
    fallback_model: str = DEFAULT_FALLBACK_MODEL
    max_tokens: int = Field(default=4096, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Settings Store Configs
# ============================================================


class StaticSettingsConfig(BaseModel):
    """Settings fixed in the config file."""

    type: Literal["static"] = "static"
    official_sources: str | None = None

    model_config = {"frozen": True}


class YamlSettingsConfig(BaseModel):
    """Settings read from a separate, editable YAML file on every run."""

    type: Literal["yaml"] = "yaml"
    path: str = "settings.yaml"

    model_config = {"frozen": True}


SettingsConfig = Annotated[
    StaticSettingsConfig | YamlSettingsConfig,
    Field(discriminator="type"),
]


# ============================================================
# Pipeline Config
# ============================================================


class CategoryConfig(BaseModel):
    """One report category."""

    key: str = Field(min_length=1)
    topic: str = Field(min_length=1)
    scopes: list[SourceScope] = Field(default_factory=list)
    description: str = ""

    model_config = {"frozen": True}

    def to_category(self) -> Category:
        return Category(
            key=self.key,
            topic=self.topic,
            scopes=tuple(self.scopes),
            description=self.description,
        )


def _default_category_configs() -> list[CategoryConfig]:
    return [
        CategoryConfig(
            key=c.key,
            topic=c.topic,
            scopes=list(c.scopes),
            description=c.description,
        )
        for c in DEFAULT_CATEGORIES
    ]


class PipelineConfig(BaseModel):
    """Configuration for IntelPipeline."""

    max_candidates: int = Field(default=5, ge=1, le=10)
    recency_days: int = Field(default=30, ge=1)
    categories: list[CategoryConfig] = Field(default_factory=_default_category_configs)

    model_config = {"frozen": True}

    @field_validator("categories")
    @classmethod
    def keys_must_be_unique(cls, v: list[CategoryConfig]) -> list[CategoryConfig]:
        keys = [c.key for c in v]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate category keys: {keys}")
        if not v:
            raise ValueError("At least one category is required")
        return v


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for intermediate pipeline logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class IntelConfig(BaseModel):
    """Root configuration for travel intel."""

    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    search: GoogleSearchConfig = Field(default_factory=GoogleSearchConfig)
    scraper: HttpScraperConfig = Field(default_factory=HttpScraperConfig)
    generator: ClaudeGeneratorConfig = Field(default_factory=ClaudeGeneratorConfig)
    settings: SettingsConfig = Field(default_factory=StaticSettingsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
