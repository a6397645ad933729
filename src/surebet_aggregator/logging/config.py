# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire."""

from __future__ import annotations

import logging
import logfire
import structlog
from typing import Any
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from surebet_aggregator.config import AppSettings, LoggingSettings, Settings, get_settings

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _service_context(app_settings: AppSettings) -> Processor:
    """Processor attaching logger name and the run's service identity to every event."""
    static: dict[str, Any] = {
        "app_name": app_settings.app_name,
        "environment": app_settings.environment,
    }
    if app_settings.service_name:
        static["service_name"] = app_settings.service_name
    if app_settings.service_version:
        static["service_version"] = app_settings.service_version

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        for key, value in static.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _console_handler(logging_settings: LoggingSettings) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(_level(logging_settings.console_level))
    return handler


def _file_handler(logging_settings: LoggingSettings) -> logging.Handler:
    """Rotating file handler; creates the log directory if needed."""
    path = Path(logging_settings.log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        path,
        when=logging_settings.log_file_when,
        interval=logging_settings.log_file_interval,
        backupCount=logging_settings.log_file_backup_count,
        encoding="utf-8",
        utc=logging_settings.log_file_utc,
    )
    handler.setLevel(_level(logging_settings.file_level))
    return handler


def _build_handlers(logging_settings: LoggingSettings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if logging_settings.log_to_console:
        handlers.append(_console_handler(logging_settings))
    if logging_settings.log_to_file:
        handlers.append(_file_handler(logging_settings))
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _configure_logfire(settings: Settings) -> None:
    app_settings = settings.app
    logging_settings = settings.logging
    logfire.configure(
        token=logging_settings.logfire_token,
        service_name=app_settings.service_name or app_settings.app_name,
        service_version=app_settings.service_version,
        min_level=LOG_LEVEL_TO_LOGFIRE.get(logging_settings.logfire_level, "info"),  # type: ignore[arg-type]
        environment=app_settings.environment,
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib handlers, structlog and (optionally) Logfire.

    File output is always JSON; the console uses JSON only when json_format is set
    and no file handler is active.
    """
    settings = settings or get_settings()
    logging_settings = settings.logging

    handlers = _build_handlers(logging_settings)
    if handlers:
        logging.basicConfig(
            level=min(handler.level for handler in handlers),
            handlers=handlers,
            force=True,
        )

    if logging_settings.logfire_enabled:
        _configure_logfire(settings)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings.app),
    ]
    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if handlers:
        if logging_settings.log_to_file or logging_settings.json_format:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
