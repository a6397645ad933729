"""Configuration subpackage."""

from surebet_aggregator.config.config import (
    ApiSettings,
    AppSettings,
    EngineSettings,
    LoggingSettings,
    ScraperSettings,
    Settings,
    SourceSettings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "EngineSettings",
    "LoggingSettings",
    "ScraperSettings",
    "Settings",
    "SourceSettings",
    "StorageSettings",
    "get_settings",
]
