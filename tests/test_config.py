"""Tests for configuration loading and factory functions."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest
from pydantic import ValidationError

from travel_intel.config import (
    CategoryConfig,
    ClaudeGeneratorConfig,
    GoogleSearchConfig,
    HttpScraperConfig,
    IntelConfig,
    PipelineConfig,
    StaticSettingsConfig,
    YamlSettingsConfig,
    create_from_config,
    get_default_config_path,
    load_config,
)
from travel_intel.config.factory import (
    create_generator,
    create_scraper,
    create_search_client,
    create_settings_store,
)
from travel_intel.data import DEFAULT_CATEGORIES, SourceScope
from travel_intel.pipeline import IntelPipeline
from travel_intel.run_logger import RunLogger
from travel_intel.scrape.http import HttpScraper
from travel_intel.search.google import GoogleSearchClient
from travel_intel.settings import StaticSettingsStore, YamlSettingsStore
from travel_intel.summarize import ClaudeGenerativeClient


class TestConfigModels:
    """Tests for Pydantic config models."""

    def test_google_search_config_defaults(self) -> None:
        config = GoogleSearchConfig()
        assert config.type == "google"
        assert config.api_key is None
        assert config.timeout == 30.0

    def test_scraper_config_defaults(self) -> None:
        config = HttpScraperConfig()
        assert config.type == "http"
        assert config.max_chars == 5000

    def test_generator_config_defaults(self) -> None:
        config = ClaudeGeneratorConfig()
        assert config.type == "claude"
        assert config.primary_model == "claude-haiku-4-5-20251001"
        assert config.fallback_model == "claude-sonnet-4-5-20250929"

    def test_pipeline_config_defaults(self) -> None:
        config = PipelineConfig()
        assert config.max_candidates == 5
        assert config.recency_days == 30
        assert [c.to_category() for c in config.categories] == list(DEFAULT_CATEGORIES)

    def test_max_candidates_bounds(self) -> None:
        with pytest.raises(ValidationError):
            PipelineConfig(max_candidates=0)
        with pytest.raises(ValidationError):
            PipelineConfig(max_candidates=11)

    def test_duplicate_category_keys_rejected(self) -> None:
        category = CategoryConfig(key="health", topic="x")
        with pytest.raises(ValidationError, match="Duplicate"):
            PipelineConfig(categories=[category, category])

    def test_empty_categories_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PipelineConfig(categories=[])

    def test_category_scopes_parse_from_strings(self) -> None:
        category = CategoryConfig.model_validate(
            {"key": "health", "topic": "x", "scopes": ["official", "local"]}
        )
        assert category.to_category().scopes == (SourceScope.OFFICIAL, SourceScope.LOCAL)

    def test_unknown_scope_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CategoryConfig.model_validate({"key": "k", "topic": "t", "scopes": ["global"]})

    def test_root_config_defaults(self) -> None:
        config = IntelConfig()
        assert isinstance(config.settings, StaticSettingsConfig)
        assert config.logging.enabled is False

    def test_settings_discriminator(self) -> None:
        config = IntelConfig.model_validate({"settings": {"type": "yaml", "path": "s.yaml"}})
        assert isinstance(config.settings, YamlSettingsConfig)
        assert config.settings.path == "s.yaml"

    def test_config_is_frozen(self) -> None:
        config = PipelineConfig()
        with pytest.raises(ValidationError):
            config.max_candidates = 3  # type: ignore[misc]


class TestLoadConfig:
    """Tests for YAML config loading."""

    def test_load_default_config(self) -> None:
        config = load_config(get_default_config_path())
        assert isinstance(config, IntelConfig)
        assert [c.key for c in config.pipeline.categories] == [
            "advisories",
            "scams",
            "theft",
            "health",
            "political",
        ]
        assert isinstance(config.settings, YamlSettingsConfig)

    def test_load_custom_config(self) -> None:
        yaml_content = """
pipeline:
  max_candidates: 3
  recency_days: 14
  categories:
    - key: floods
      topic: "(flooding OR landslides)"
      scopes: [local]
generator:
  primary_model: model-a
  fallback_model: model-b
"""
        with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            path = Path(f.name)

        try:
            config = load_config(path)
            assert config.pipeline.max_candidates == 3
            assert config.pipeline.recency_days == 14
            assert config.pipeline.categories[0].key == "floods"
            assert config.generator.primary_model == "model-a"
        finally:
            path.unlink()

    def test_load_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == IntelConfig()

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")


class TestFactory:
    """Tests for factory functions."""

    def test_create_search_client(self) -> None:
        client = create_search_client(
            GoogleSearchConfig(api_key="k", engine_id="c"), num_results=3
        )
        assert isinstance(client, GoogleSearchClient)
        assert client.is_configured
        assert client._num_results == 3

    def test_create_scraper(self) -> None:
        scraper = create_scraper(HttpScraperConfig(max_chars=100))
        assert isinstance(scraper, HttpScraper)
        assert scraper._max_chars == 100

    def test_create_generator(self) -> None:
        assert isinstance(create_generator(ClaudeGeneratorConfig()), ClaudeGenerativeClient)

    async def test_create_static_settings_store(self) -> None:
        store = create_settings_store(StaticSettingsConfig(official_sources="a.gov"))
        assert isinstance(store, StaticSettingsStore)
        assert (await store.get()).official_sources == "a.gov"

    def test_create_yaml_settings_store(self) -> None:
        store = create_settings_store(YamlSettingsConfig(path="x.yaml"))
        assert isinstance(store, YamlSettingsStore)

    def test_create_from_config(self) -> None:
        pipeline, run_logger = create_from_config(IntelConfig())
        assert isinstance(pipeline, IntelPipeline)
        assert run_logger is None
        assert [c.key for c in pipeline.categories] == [c.key for c in DEFAULT_CATEGORIES]

    def test_create_from_config_log_override(self, tmp_path: Path) -> None:
        _, run_logger = create_from_config(
            IntelConfig(), log_override=True, log_dir_override=str(tmp_path)
        )
        assert isinstance(run_logger, RunLogger)
        assert run_logger.enabled
