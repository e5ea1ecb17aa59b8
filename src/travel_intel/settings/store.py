"""Application settings that supply the externally configured source list."""

import asyncio
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import BaseModel

DEFAULT_OFFICIAL_SOURCES = (
    "travel.state.gov, www.gov.uk/foreign-travel-advice, www.smartraveller.gov.au"
)


class AppSettings(BaseModel):
    """Admin-editable settings read once per run."""

    official_sources: str = DEFAULT_OFFICIAL_SOURCES

    model_config = {"frozen": True, "extra": "ignore"}


class SettingsStore(Protocol):
    """Interface for the key/value settings store."""

    async def get(self) -> AppSettings: ...


class StaticSettingsStore:
    """Settings store backed by a fixed in-memory value."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    async def get(self) -> AppSettings:
        return self._settings


class YamlSettingsStore:
    """Settings store backed by a YAML file, re-read on every ``get``.

    A missing file yields the defaults so a fresh deployment works unconfigured.

    Args:
        path: Path to the YAML settings file.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    async def get(self) -> AppSettings:
        return await asyncio.to_thread(self._load)

    def _load(self) -> AppSettings:
        if not self._path.exists():
            return AppSettings()
        with self._path.open() as f:
            raw = yaml.safe_load(f)
        return AppSettings.model_validate(raw or {})
