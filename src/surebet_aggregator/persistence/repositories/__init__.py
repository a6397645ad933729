# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, file, apify, state)."""

from surebet_aggregator.persistence.repositories.interfaces import IKeyValueStore, IResultsSink
from surebet_aggregator.persistence.repositories.in_memory import (
    InMemoryKeyValueStore,
    InMemoryResultsSink,
)
from surebet_aggregator.persistence.repositories.file import (
    JsonFileKeyValueStore,
    JsonLinesResultsSink,
)
from surebet_aggregator.persistence.repositories.apify import ApifyDatasetSink, ApifyKeyValueStore
from surebet_aggregator.persistence.repositories.state import (
    DedupLedgerRepository,
    FrequencyTableRepository,
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
