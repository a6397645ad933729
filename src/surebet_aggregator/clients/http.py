# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import json as jsonlib
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from surebet_aggregator.config import Settings
from surebet_aggregator.exceptions import ApifyAPIError, RateLimitError

# Client errors that will not change on retry.
_NO_RETRY_STATUSES = frozenset({400, 401, 403, 404, 405, 409, 413, 422})

# Methods safe to resend after a timeout or 5xx; a POST may already have been applied.
_IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "PUT", "DELETE"})

# Sentinel for "response was rate limited, try again".
_RETRY = object()


def _retry_after_seconds(response: aiohttp.ClientResponse) -> Optional[float]:
    header = response.headers.get("Retry-After")
    if not header:
        return None
    try:
        return float(header)
    except ValueError:
        return None


def _decode_body(text: str) -> Any:
    """Apify answers some writes with an empty body."""
    return jsonlib.loads(text) if text.strip() else None


class AsyncHttpClient:
    """Async HTTP client for the Apify API with retries and 429 handling.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created with the bearer token header and must be
    closed via aclose() or used as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (api.timeout_seconds, api.max_retries, token).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _auth_headers(self) -> Dict[str, str]:
        token = self._settings.effective_token
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds),
                headers=self._auth_headers(),
            )
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        return min(4.0, 0.25 * (2**attempt)) + random.uniform(0.0, 0.15)

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        not_found_ok: bool = False,
    ) -> Any:
        """GET and return JSON (None for 404 when not_found_ok)."""
        return await self.request("GET", url, params=params, not_found_ok=not_found_ok)

    async def post(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        retry_on_error: bool = False,
    ) -> Any:
        """POST and return JSON. Only 429 is retried unless retry_on_error is set."""
        return await self.request(
            "POST", url, params=params, json=json, retry_on_error=retry_on_error
        )

    async def put(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        return await self.request("PUT", url, params=params, json=json)

    async def _read_response(
        self,
        response: aiohttp.ClientResponse,
        *,
        method: str,
        url: str,
        attempt: int,
        not_found_ok: bool,
    ) -> Any:
        """Map one response to a decoded body, _RETRY (after sleeping) or an exception."""
        event_prefix = f"http_{method.lower()}"
        if response.status == 429:
            retry_after = _retry_after_seconds(response)
            self._logger.warning(
                f"{event_prefix}_rate_limited",
                http_status_code=429,
                http_retry_after_seconds=retry_after,
            )
            if retry_after is not None and retry_after > 0:
                await asyncio.sleep(retry_after)
            else:
                await asyncio.sleep(self._backoff_delay(attempt))
            return _RETRY

        if response.status == 404 and not_found_ok:
            return None

        if response.status in _NO_RETRY_STATUSES:
            body = await response.text()
            self._logger.error(
                f"{event_prefix}_client_error",
                http_status_code=response.status,
                http_response_body=body[:500],
            )
            raise ApifyAPIError(
                f"{method} {url} returned {response.status}",
                url=url,
                status_code=response.status,
            )

        response.raise_for_status()
        return _decode_body(await response.text())

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        not_found_ok: bool = False,
        retry_on_error: Optional[bool] = None,
    ) -> Any:
        """Perform a request and return parsed JSON, retrying 429 and (when safe) 5xx and network errors.

        Args:
            method: HTTP method.
            url: Full URL to request.
            params: Optional query parameters.
            json: Optional JSON-serializable body.
            not_found_ok: Return None instead of raising on 404.
            retry_on_error: Resend after 5xx, timeouts and connection errors.
                Defaults to True for idempotent methods only.

        Returns:
            Parsed JSON response, or None for an empty body.

        Raises:
            RateLimitError: If every attempt was rate limited.
            ApifyAPIError: On a non-retryable error or after all retries.
        """
        if retry_on_error is None:
            retry_on_error = method.upper() in _IDEMPOTENT_METHODS
        max_retries = self._settings.api.max_retries
        event_prefix = f"http_{method.lower()}"
        last_error: Optional[Exception] = None
        attempts = 0

        with bound_contextvars(
            http_method=method,
            http_url=url,
            http_request_id=uuid.uuid4().hex[:12],
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                attempts = attempt + 1
                with bound_contextvars(http_attempt=attempts):
                    try:
                        session = await self._get_session()
                        async with session.request(
                            method, url, params=params or {}, json=json
                        ) as response:
                            result = await self._read_response(
                                response,
                                method=method,
                                url=url,
                                attempt=attempt,
                                not_found_ok=not_found_ok,
                            )
                        if result is not _RETRY:
                            return result
                    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                        last_error = e
                        if not retry_on_error:
                            break
                        self._logger.debug(
                            f"{event_prefix}_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=getattr(e, "status", None),
                        )
                        await asyncio.sleep(self._backoff_delay(attempt))

            if last_error is None:
                self._logger.error(f"{event_prefix}_rate_limit_exhausted", http_attempts=max_retries)
                raise RateLimitError(url=url)

            status_code = (
                last_error.status if isinstance(last_error, aiohttp.ClientResponseError) else None
            )
            self._logger.error(
                f"{event_prefix}_failed",
                http_status_code=status_code,
                http_attempts=attempts,
                error_type=type(last_error).__name__,
                error_message=str(last_error),
            )
            raise ApifyAPIError(
                f"{method} failed after {attempts} attempt(s): {url}",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
