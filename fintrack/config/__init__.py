"""Configuration package."""

from fintrack.config.settings import (
    DEFAULT_CATEGORIES,
    AppSettings,
    EngineSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "AppSettings",
    "EngineSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
