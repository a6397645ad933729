"""Apify platform API client."""

from surebet_aggregator.clients.apify.apify import ApifyApiClient
from surebet_aggregator.clients.apify.schema import (
    ActorRunSchema,
    OutcomeSchema,
    StorageSchema,
    SurebetItemSchema,
)

__all__ = [
    "ActorRunSchema",
    "ApifyApiClient",
    "OutcomeSchema",
    "StorageSchema",
    "SurebetItemSchema",
]
