from travel_intel.settings.store import (
    DEFAULT_OFFICIAL_SOURCES,
    AppSettings,
    SettingsStore,
    StaticSettingsStore,
    YamlSettingsStore,
)

__all__ = [
    "DEFAULT_OFFICIAL_SOURCES",
    "AppSettings",
    "SettingsStore",
    "StaticSettingsStore",
    "YamlSettingsStore",
]
