# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, STORAGE__BACKEND.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "surebet-aggregator"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/surebet_aggregator.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the Apify platform API (HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    apify_host: str = Field(
        default="https://api.apify.com",
        description="Apify API base URL.",
    )
    token: Optional[str] = Field(
        default=None,
        description="Apify API token. Env: API__TOKEN or APIFY_TOKEN.",
    )
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=6,
        ge=1,
        le=20,
        description="Maximum number of retries for failed requests.",
    )
    wait_for_finish_seconds: int = Field(
        default=60,
        ge=0,
        le=60,
        description="Server-side wait per run status request (Apify caps this at 60).",
    )
    dataset_page_size: int = Field(
        default=1000,
        ge=1,
        le=250000,
        description="Items fetched per dataset page.",
    )


class ScraperSettings(BaseSettings):
    """Upstream scraping task whose dataset feeds each run."""

    model_config = SettingsConfigDict(extra="ignore")

    task_id: str = Field(
        default="straightforward_understanding/oddspedia-scan-surebets",
        description="Apify task id or 'user/task-name'.",
    )
    max_wait_seconds: float = Field(
        default=3600.0,
        ge=1.0,
        description="Give up waiting for the task run after this many seconds.",
    )


class StorageSettings(BaseSettings):
    """Where the dedup ledger, frequency table and results are kept."""

    model_config = SettingsConfigDict(extra="ignore")

    backend: Literal["memory", "file", "apify"] = "file"
    data_dir: str = Field(
        default="storage",
        description="Root directory for the file backend.",
    )
    state_store_name: str = "STATE"
    counts_store_name: str = "COUNTS"
    results_dataset_name: Optional[str] = Field(
        default=None,
        description=(
            "Named results dataset. None uses ACTOR_DEFAULT_DATASET_ID on Apify "
            "and 'results' for the file backend."
        ),
    )


class SourceSettings(BaseSettings):
    """Where raw surebet records come from."""

    model_config = SettingsConfigDict(extra="ignore")

    backend: Literal["scraper", "file"] = "scraper"
    input_path: Optional[str] = Field(
        default=None,
        description="JSON array or JSON lines file for the file backend.",
    )


class EngineSettings(BaseSettings):
    """Combination engine limits."""

    model_config = SettingsConfigDict(extra="ignore")

    max_brokers: int = Field(
        default=20,
        ge=2,
        le=30,
        description="Records with more distinct brokers are skipped (2^n blow-up cap).",
    )
    key_delimiter: str = Field(default="|", min_length=1)


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, SCRAPER__TASK_ID.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    scraper: ScraperSettings = Field(default_factory=ScraperSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)

    # Flat env names used by the Apify platform; they win over the nested defaults.
    scraper_task_id: Optional[str] = None
    apify_token: Optional[str] = None
    actor_default_dataset_id: Optional[str] = None

    @property
    def effective_task_id(self) -> str:
        """SCRAPER_TASK_ID if set, else scraper.task_id."""
        if self.scraper_task_id and self.scraper_task_id.strip():
            return self.scraper_task_id.strip()
        return self.scraper.task_id

    @property
    def effective_token(self) -> Optional[str]:
        """API__TOKEN if set, else APIFY_TOKEN."""
        return self.api.token or self.apify_token

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(storage={"backend": "memory"})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from surebet_aggregator.config import get_settings

        settings = get_settings()
        max_brokers = settings.engine.max_brokers
    """
    return Settings()
