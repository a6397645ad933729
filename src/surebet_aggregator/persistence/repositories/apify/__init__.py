"""Apify-backed repository implementations."""

from surebet_aggregator.persistence.repositories.apify.dataset_sink import ApifyDatasetSink
from surebet_aggregator.persistence.repositories.apify.key_value_store import ApifyKeyValueStore

__all__ = ["ApifyDatasetSink", "ApifyKeyValueStore"]
