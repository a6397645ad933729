"""HTTP and API clients."""

from surebet_aggregator.clients.apify import ApifyApiClient
from surebet_aggregator.clients.http import AsyncHttpClient

__all__ = [
    "ApifyApiClient",
    "AsyncHttpClient",
]
