"""Configuration module for travel intel."""

from travel_intel.config.factory import create_from_config
from travel_intel.config.loader import get_default_config_path, load_config
from travel_intel.config.models import (
    CategoryConfig,
    ClaudeGeneratorConfig,
    GoogleSearchConfig,
    HttpScraperConfig,
    IntelConfig,
    LoggingConfig,
    PipelineConfig,
    SettingsConfig,
    StaticSettingsConfig,
    YamlSettingsConfig,
)

__all__ = [
    "CategoryConfig",
    "ClaudeGeneratorConfig",
    "GoogleSearchConfig",
    "HttpScraperConfig",
    "IntelConfig",
    "LoggingConfig",
    "PipelineConfig",
    "SettingsConfig",
    "StaticSettingsConfig",
    "YamlSettingsConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
