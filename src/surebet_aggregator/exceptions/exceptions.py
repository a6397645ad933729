"""Custom exceptions for the Apify API, configuration and the combination engine."""

from __future__ import annotations


class SurebetAggregatorError(Exception):
    """Base exception for aggregator errors."""

    pass


class MissingRequiredConfigError(SurebetAggregatorError):
    """Raised when a required configuration value is missing."""

    pass


class ApifyAPIError(SurebetAggregatorError):
    """Raised when an Apify API request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(ApifyAPIError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class ScraperRunError(SurebetAggregatorError):
    """Raised when the upstream scraping task run does not succeed."""

    def __init__(self, message: str, *, run_id: str | None = None, status: str | None = None) -> None:
        super().__init__(message)
        self.run_id = run_id
        self.status = status


class CombinationLimitExceededError(SurebetAggregatorError):
    """Raised when a broker list is longer than the enumeration cap."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"{count} distinct brokers exceeds the limit of {limit}")
        self.count = count
        self.limit = limit


class FingerprintError(SurebetAggregatorError):
    """Raised when a (combination, timestamp) fingerprint cannot be computed."""

    pass
