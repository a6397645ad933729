"""Persistence layer (stores, sinks, state repositories)."""

from surebet_aggregator.persistence.repositories import (
    ApifyDatasetSink,
    ApifyKeyValueStore,
    DedupLedgerRepository,
    FrequencyTableRepository,
    IKeyValueStore,
    InMemoryKeyValueStore,
    InMemoryResultsSink,
    IResultsSink,
    JsonFileKeyValueStore,
    JsonLinesResultsSink,
)

__all__ = [
    "IKeyValueStore",
    "IResultsSink",
    "InMemoryKeyValueStore",
    "InMemoryResultsSink",
    "JsonFileKeyValueStore",
    "JsonLinesResultsSink",
    "ApifyDatasetSink",
    "ApifyKeyValueStore",
    "DedupLedgerRepository",
    "FrequencyTableRepository",
]
