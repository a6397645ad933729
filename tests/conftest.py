# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit and integration tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from surebet_aggregator.persistence.repositories.in_memory import (
    InMemoryKeyValueStore,
    InMemoryResultsSink,
)
from surebet_aggregator.persistence.repositories.state import (
    DedupLedgerRepository,
    FrequencyTableRepository,
)
from surebet_aggregator.services.aggregation import AggregationEngine
from surebet_aggregator.services.combinations import CombinationGenerator


@pytest.fixture
def timestamp() -> str:
    """Default upstream `date` used by tests."""
    return "2024-01-01T00:00:00Z"


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for the ingestion-time fallback."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now_utc: datetime) -> Callable[[], datetime]:
    return lambda: now_utc


@pytest.fixture
def item_factory(timestamp: str) -> Callable[..., dict[str, Any]]:
    """Build a raw scraper item: item_factory("A", "B", date=...)."""

    def _build(*brokers: str, **overrides: Any) -> dict[str, Any]:
        item: dict[str, Any] = {
            "outcomes": [{"broker": b} for b in brokers],
            "date": overrides.pop("date", timestamp),
        }
        item.update(overrides)
        return item

    return _build


@pytest.fixture
def state_store() -> InMemoryKeyValueStore:
    """Fresh in-memory STATE store per test."""
    return InMemoryKeyValueStore(name="STATE")


@pytest.fixture
def counts_store() -> InMemoryKeyValueStore:
    """Fresh in-memory COUNTS store per test."""
    return InMemoryKeyValueStore(name="COUNTS")


@pytest.fixture
def results_sink() -> InMemoryResultsSink:
    return InMemoryResultsSink()


@pytest.fixture
def ledger_repo(state_store: InMemoryKeyValueStore) -> DedupLedgerRepository:
    return DedupLedgerRepository(state_store)


@pytest.fixture
def frequency_repo(counts_store: InMemoryKeyValueStore) -> FrequencyTableRepository:
    return FrequencyTableRepository(counts_store)


@pytest.fixture
def engine(clock: Callable[[], datetime]) -> AggregationEngine:
    """Engine with the default broker cap and a fixed clock."""
    return AggregationEngine(CombinationGenerator(), clock=clock)
