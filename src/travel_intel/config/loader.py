"""YAML configuration loading utilities."""

from pathlib import Path

import yaml

from travel_intel.config.models import IntelConfig


def load_config(path: Path | str) -> IntelConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated IntelConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    return IntelConfig.model_validate(raw or {})


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parents[3] / "configs" / "default.yaml"
