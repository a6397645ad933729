# -*- coding: utf-8 -*-
"""Apify platform API client (task runs, datasets, key-value stores)."""

from __future__ import annotations

import asyncio
import time
import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast
from urllib.parse import quote
from structlog.contextvars import bound_contextvars

from surebet_aggregator.clients.apify.schema import (
    RUN_TERMINAL_STATUSES,
    ActorRunSchema,
    StorageSchema,
)
from surebet_aggregator.config import Settings
from surebet_aggregator.exceptions import ApifyAPIError, ScraperRunError

if TYPE_CHECKING:
    from surebet_aggregator.clients.http import AsyncHttpClient


def _resource_id(identifier: str) -> str:
    """'user/name' -> 'user~name' as the API expects, then URL-quoted."""
    return quote(identifier.strip().replace("/", "~"), safe="~")


def _unwrap(response: Any, url: str) -> Dict[str, Any]:
    """Return response['data'] or raise if the envelope is missing."""
    if isinstance(response, dict) and isinstance(response.get("data"), dict):
        return cast(Dict[str, Any], response["data"])
    raise ApifyAPIError(f"unexpected response shape from {url}", url=url)


class ApifyApiClient:
    """Client for the Apify v2 API endpoints the aggregator needs."""

    PUSH_CHUNK_SIZE = 500

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api and settings.scraper).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
            sleep: Awaitable sleep (injected for tests).
            monotonic: Clock used for the run wait deadline (injected for tests).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._sleep = sleep
        self._monotonic = monotonic

    def _base_url(self) -> str:
        return f"{self._settings.api.apify_host.rstrip('/')}/v2"

    # ------------------------------------------------------------------
    # Task runs
    # ------------------------------------------------------------------

    async def run_task(self, task_id: str) -> ActorRunSchema:
        """Start a task run (POST /actor-tasks/{id}/runs) and return the Run object."""
        url = f"{self._base_url()}/actor-tasks/{_resource_id(task_id)}/runs"
        with bound_contextvars(apify_task_id=task_id):
            data = _unwrap(await self._http.post(url), url)
            self._logger.info(
                "apify_task_run_started",
                apify_run_id=data.get("id"),
                apify_run_status=data.get("status"),
            )
            return cast(ActorRunSchema, data)

    async def get_run(self, run_id: str, *, wait_for_finish: int = 0) -> ActorRunSchema:
        """GET /actor-runs/{id}, optionally letting the server wait up to 60s for completion."""
        url = f"{self._base_url()}/actor-runs/{_resource_id(run_id)}"
        params: Dict[str, Any] = {}
        if wait_for_finish > 0:
            params["waitForFinish"] = min(60, wait_for_finish)
        return cast(ActorRunSchema, _unwrap(await self._http.get(url, params=params), url))

    async def wait_for_run(self, run: ActorRunSchema) -> ActorRunSchema:
        """Poll until the run reaches a terminal status.

        Raises:
            ScraperRunError: If the run does not succeed or the wait deadline passes.
        """
        run_id = run.get("id") or ""
        if not run_id:
            raise ScraperRunError("run has no id", status=run.get("status"))
        deadline = self._monotonic() + self._settings.scraper.max_wait_seconds
        wait = self._settings.api.wait_for_finish_seconds
        current = run
        with bound_contextvars(apify_run_id=run_id):
            while current.get("status") not in RUN_TERMINAL_STATUSES:
                if self._monotonic() >= deadline:
                    raise ScraperRunError(
                        f"run {run_id} still {current.get('status')} after "
                        f"{self._settings.scraper.max_wait_seconds}s",
                        run_id=run_id,
                        status=current.get("status"),
                    )
                if wait <= 0:
                    await self._sleep(1.0)
                current = await self.get_run(run_id, wait_for_finish=wait)
                self._logger.debug("apify_run_polled", apify_run_status=current.get("status"))

            status = current.get("status")
            if status != "SUCCEEDED":
                self._logger.error(
                    "apify_run_unsuccessful",
                    apify_run_status=status,
                    apify_status_message=current.get("statusMessage"),
                )
                raise ScraperRunError(f"run {run_id} finished with status {status}", run_id=run_id, status=status)
            return current

    async def call_task(self, task_id: str) -> ActorRunSchema:
        """Start a task and wait for it to succeed. Returns the finished Run."""
        run = await self.run_task(task_id)
        return await self.wait_for_run(run)

    # ------------------------------------------------------------------
    # Datasets
    # ------------------------------------------------------------------

    async def list_dataset_items(
        self,
        dataset_id: str,
        *,
        page_size: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch all items of a dataset, paginating with offset/limit.

        Non-dict items are dropped with a warning (counted, not raised).
        """
        limit = page_size or self._settings.api.dataset_page_size
        url = f"{self._base_url()}/datasets/{_resource_id(dataset_id)}/items"
        items: List[Dict[str, Any]] = []
        offset = 0
        dropped = 0
        with bound_contextvars(apify_dataset_id=dataset_id):
            while True:
                page = await self._http.get(
                    url,
                    params={"format": "json", "clean": "true", "offset": offset, "limit": limit},
                )
                if not isinstance(page, list):
                    self._logger.warning(
                        "apify_dataset_items_non_list",
                        apify_response_type=type(page).__name__,
                    )
                    break
                for x in cast(list[Any], page):
                    if isinstance(x, dict):
                        items.append(cast(Dict[str, Any], x))
                    else:
                        dropped += 1
                if len(page) < limit:
                    break
                offset += limit
            if dropped:
                self._logger.warning("apify_dataset_items_dropped_non_object", dropped=dropped)
            self._logger.debug("apify_dataset_items_listed", item_count=len(items))
        return items

    async def get_or_create_dataset(self, name: str) -> StorageSchema:
        """POST /datasets?name=... returns the existing named dataset or creates it.

        Idempotent by name, so it is safe to resend.
        """
        url = f"{self._base_url()}/datasets"
        response = await self._http.post(url, params={"name": name}, retry_on_error=True)
        return cast(StorageSchema, _unwrap(response, url))

    async def push_items(self, dataset_id: str, items: List[Dict[str, Any]]) -> None:
        """Append items to a dataset in chunks (POST /datasets/{id}/items).

        A chunk that fails with a timeout or 5xx is not resent, since the server may
        already have stored it.
        """
        url = f"{self._base_url()}/datasets/{_resource_id(dataset_id)}/items"
        for start in range(0, len(items), self.PUSH_CHUNK_SIZE):
            chunk = items[start : start + self.PUSH_CHUNK_SIZE]
            await self._http.post(url, json=chunk)
        self._logger.debug("apify_dataset_items_pushed", apify_dataset_id=dataset_id, item_count=len(items))

    # ------------------------------------------------------------------
    # Key-value stores
    # ------------------------------------------------------------------

    async def get_or_create_key_value_store(self, name: str) -> StorageSchema:
        """POST /key-value-stores?name=... returns the existing named store or creates it.

        Idempotent by name, so it is safe to resend.
        """
        url = f"{self._base_url()}/key-value-stores"
        response = await self._http.post(url, params={"name": name}, retry_on_error=True)
        return cast(StorageSchema, _unwrap(response, url))

    async def get_record(self, store_id: str, key: str) -> Any:
        """Return the JSON value stored under key, or None if absent."""
        url = f"{self._base_url()}/key-value-stores/{_resource_id(store_id)}/records/{quote(key, safe='')}"
        return await self._http.get(url, not_found_ok=True)

    async def set_record(self, store_id: str, key: str, value: Any) -> None:
        """Replace the value stored under key (PUT, JSON)."""
        url = f"{self._base_url()}/key-value-stores/{_resource_id(store_id)}/records/{quote(key, safe='')}"
        await self._http.put(url, json=value)
