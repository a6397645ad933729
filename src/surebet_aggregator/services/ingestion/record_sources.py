# -*- coding: utf-8 -*-
"""Record sources: where a run's raw surebet items come from."""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import structlog
from structlog.contextvars import bound_contextvars

from surebet_aggregator.exceptions import ScraperRunError

if TYPE_CHECKING:
    from surebet_aggregator.clients.apify import ApifyApiClient


class IRecordSource(ABC):
    """Finite, ordered batch of raw items for one run."""

    @abstractmethod
    async def fetch(self) -> list[Any]:
        """Return the raw items (unvalidated)."""
        ...


class ScraperTaskRecordSource(IRecordSource):
    """Calls the upstream scraping task, waits for it, and reads its default dataset."""

    def __init__(
        self,
        client: ApifyApiClient,
        task_id: str,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            client: Apify API client (injected).
            task_id: Task id or 'user/task-name'.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._client = client
        self._task_id = task_id
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def fetch(self) -> list[Any]:
        with bound_contextvars(scraper_task_id=self._task_id):
            self._logger.info("scraper_task_calling")
            run = await self._client.call_task(self._task_id)
            dataset_id = run.get("defaultDatasetId")
            self._logger.info(
                "scraper_task_finished",
                apify_run_id=run.get("id"),
                apify_run_status=run.get("status"),
                apify_dataset_id=dataset_id,
            )
            if not dataset_id:
                raise ScraperRunError(
                    "scraper run has no default dataset",
                    run_id=run.get("id"),
                    status=run.get("status"),
                )
            items = await self._client.list_dataset_items(dataset_id)
            self._logger.info("scraper_items_retrieved", item_count=len(items), apify_dataset_id=dataset_id)
            if not items:
                self._logger.warning(
                    "scraper_dataset_empty",
                    message="No items found in the scraper dataset; check task health and parameters.",
                )
            return list(items)


class JsonFileRecordSource(IRecordSource):
    """Reads items from a JSON array file or a JSON lines file."""

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def fetch(self) -> list[Any]:
        text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        stripped = text.lstrip()
        if not stripped:
            items: list[Any] = []
        elif stripped.startswith("["):
            data = json.loads(text)
            items = cast(list[Any], data)
        else:
            items = [json.loads(line) for line in text.splitlines() if line.strip()]
        self._logger.info("file_items_loaded", path=str(self._path), item_count=len(items))
        if not items:
            self._logger.warning("file_source_empty", path=str(self._path))
        return items
