# -*- coding: utf-8 -*-
"""Unit tests for DedupLedgerRepository and FrequencyTableRepository."""

from __future__ import annotations

from typing import Any

import pytest

from surebet_aggregator.exceptions import CorruptStateError, StateLoadError, StatePersistError
from surebet_aggregator.persistence.repositories.in_memory import InMemoryKeyValueStore
from surebet_aggregator.persistence.repositories.state import (
    COMBO_COUNTS_KEY,
    SEEN_HASHES_KEY,
    DedupLedgerRepository,
    FrequencyTableRepository,
)
from surebet_aggregator.services.dedup import DedupLedger
from surebet_aggregator.services.frequency import FrequencyTable
from surebet_aggregator.utils.dedupe import fingerprint

TS = "2024-01-01T00:00:00Z"


class _BrokenStore(InMemoryKeyValueStore):
    async def get_value(self, key: str) -> Any | None:
        raise ConnectionError("unreachable")

    async def set_value(self, key: str, value: Any) -> None:
        raise ConnectionError("unreachable")


async def test_ledger_cold_start_is_empty(ledger_repo: DedupLedgerRepository) -> None:
    ledger = await ledger_repo.load()
    assert len(ledger) == 0
    assert ledger_repo.key == SEEN_HASHES_KEY


async def test_ledger_save_then_load_keeps_order(
    state_store: InMemoryKeyValueStore,
    ledger_repo: DedupLedgerRepository,
) -> None:
    ledger = await ledger_repo.load()
    ledger.admit("B|C", TS)
    ledger.admit("A|B", TS)
    await ledger_repo.save(ledger)

    assert await state_store.get_value(SEEN_HASHES_KEY) == [
        fingerprint("B|C", TS),
        fingerprint("A|B", TS),
    ]
    reloaded = await ledger_repo.load()
    assert reloaded.admit("A|B", TS) is False


@pytest.mark.parametrize(
    "value",
    [
        {"a": 1},
        "abc",
        [1, 2],
        ["not-a-hash"],
        ["A" * 64],
    ],
)
async def test_ledger_corrupt_values_raise(value: Any) -> None:
    repo = DedupLedgerRepository(InMemoryKeyValueStore("STATE", {SEEN_HASHES_KEY: value}))
    with pytest.raises(CorruptStateError):
        await repo.load()


async def test_ledger_store_errors_are_wrapped() -> None:
    repo = DedupLedgerRepository(_BrokenStore("STATE"))

    with pytest.raises(StateLoadError) as load_info:
        await repo.load()
    assert load_info.value.key == SEEN_HASHES_KEY

    with pytest.raises(StatePersistError):
        await repo.save(DedupLedger())


async def test_counts_cold_start_is_empty(frequency_repo: FrequencyTableRepository) -> None:
    table = await frequency_repo.load()
    assert len(table) == 0
    assert frequency_repo.key == COMBO_COUNTS_KEY


async def test_counts_save_writes_full_snapshot(
    counts_store: InMemoryKeyValueStore,
    frequency_repo: FrequencyTableRepository,
) -> None:
    await counts_store.set_value(COMBO_COUNTS_KEY, {"A|B": 3})
    table = await frequency_repo.load()
    table.increment("A|C")
    await frequency_repo.save(table)

    assert await counts_store.get_value(COMBO_COUNTS_KEY) == {"A|B": 3, "A|C": 1}


@pytest.mark.parametrize(
    "value",
    [
        ["A|B"],
        {"A|B": -1},
        {"A|B": 1.5},
        {"A|B": "2"},
        {"A|B": True},
        {"A|B": None},
    ],
)
async def test_counts_corrupt_values_raise(value: Any) -> None:
    repo = FrequencyTableRepository(InMemoryKeyValueStore("COUNTS", {COMBO_COUNTS_KEY: value}))
    with pytest.raises(CorruptStateError):
        await repo.load()


async def test_counts_zero_is_accepted() -> None:
    repo = FrequencyTableRepository(InMemoryKeyValueStore("COUNTS", {COMBO_COUNTS_KEY: {"A|B": 0}}))
    table = await repo.load()
    assert table.get("A|B") == 0


async def test_counts_store_errors_are_wrapped() -> None:
    repo = FrequencyTableRepository(_BrokenStore("COUNTS"))

    with pytest.raises(StateLoadError):
        await repo.load()
    with pytest.raises(StatePersistError):
        await repo.save(FrequencyTable({"A|B": 1}))
