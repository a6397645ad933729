# -*- coding: utf-8 -*-
"""Unit tests for AggregationEngine."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest

from surebet_aggregator.exceptions import FingerprintError
from surebet_aggregator.models.aggregated_record import AggregatedRecord
from surebet_aggregator.models.surebet_record import SurebetRecord
from surebet_aggregator.services.aggregation.aggregation_engine import AggregationEngine
from surebet_aggregator.services.combinations import CombinationGenerator
from surebet_aggregator.services.dedup import DedupLedger
from surebet_aggregator.services.frequency import FrequencyTable

TS = "2024-01-01T00:00:00Z"


def test_three_brokers_first_run_admits_all_combinations(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process([item_factory("A", "B", "C")], ledger, table)

    assert {r.brokers for r in result.new_records} == {
        ("A", "B"),
        ("A", "C"),
        ("B", "C"),
        ("A", "B", "C"),
    }
    assert all(r.timestamp == TS for r in result.new_records)
    assert table.snapshot() == {"A|B": 1, "A|C": 1, "B|C": 1, "A|B|C": 1}
    assert len(ledger) == 4
    assert result.stats.combinations_admitted == 4


def test_same_record_again_produces_nothing(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()
    engine.process([item_factory("A", "B", "C")], ledger, table)

    again = engine.process([item_factory("C", "B", "A")], ledger, table)

    assert again.new_records == []
    assert again.stats.combinations_duplicate == 4
    assert table.snapshot() == {"A|B": 1, "A|C": 1, "B|C": 1, "A|B|C": 1}


def test_single_broker_record_is_excluded(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process([item_factory("A")], ledger, table)

    assert result.new_records == []
    assert result.stats.records_insufficient_brokers == 1
    assert len(ledger) == 0
    assert len(table) == 0


def test_same_brokers_different_timestamps_count_twice(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()
    items = [
        item_factory("A", "B", "C", date="2024-01-01T00:00:00Z"),
        item_factory("A", "B", "C", date="2024-01-02T00:00:00Z"),
    ]

    result = engine.process(items, ledger, table)

    assert len(result.new_records) == 8
    assert table.snapshot() == {"A|B": 2, "A|C": 2, "B|C": 2, "A|B|C": 2}


def test_duplicate_record_within_one_batch_is_dropped_silently(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process([item_factory("A", "B"), item_factory("B", "A")], ledger, table)

    assert result.new_records == [AggregatedRecord(brokers=("A", "B"), timestamp=TS)]
    assert table.get("A|B") == 1
    assert result.stats.combinations_duplicate == 1


def test_overlapping_records_share_sub_combinations(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process([item_factory("A", "B", "C"), item_factory("A", "B")], ledger, table)

    assert len(result.new_records) == 4
    assert table.get("A|B") == 1


def test_malformed_items_are_skipped_and_batch_continues(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()
    items: list[Any] = [None, {"outcomes": "x"}, {"date": TS}, item_factory("A", "B")]

    result = engine.process(items, ledger, table)

    assert result.stats.records_total == 4
    assert result.stats.records_malformed == 3
    assert result.stats.records_contributing == 1
    assert [r.brokers for r in result.new_records] == [("A", "B")]


def test_unencodable_broker_from_json_does_not_abort_batch(engine: AggregationEngine) -> None:
    items = json.loads(
        '[{"outcomes": [{"broker": "A"}, {"broker": "B"}], "date": "2024-01-01T00:00:00Z"},'
        ' {"outcomes": [{"broker": "C"}, {"broker": "D\\ud800"}], "date": "2024-01-01T00:00:00Z"}]'
    )
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process(items, ledger, table)

    assert [r.brokers for r in result.new_records] == [("A", "B")]
    assert result.stats.outcomes_skipped == 1
    assert result.stats.records_insufficient_brokers == 1
    assert table.snapshot() == {"A|B": 1}


def test_duplicate_broker_entries_do_not_create_extra_combinations(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process([item_factory("A", "A", "B")], ledger, table)

    assert [r.brokers for r in result.new_records] == [("A", "B")]
    assert table.snapshot() == {"A|B": 1}


def test_record_over_broker_limit_is_skipped(
    clock: Callable[[], datetime],
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    engine = AggregationEngine(CombinationGenerator(max_brokers=3), clock=clock)
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process(
        [item_factory("A", "B", "C", "D"), item_factory("X", "Y")], ledger, table
    )

    assert result.stats.records_over_limit == 1
    assert [r.brokers for r in result.new_records] == [("X", "Y")]


def test_missing_date_uses_clock_and_is_counted(
    engine: AggregationEngine,
) -> None:
    ledger, table = DedupLedger(), FrequencyTable()

    result = engine.process([{"outcomes": [{"broker": "A"}, {"broker": "B"}]}], ledger, table)

    assert result.new_records == [
        AggregatedRecord(brokers=("A", "B"), timestamp="2026-02-13T12:00:00.000Z")
    ]
    assert result.stats.timestamps_defaulted == 1


def test_prior_ledger_state_is_respected(
    engine: AggregationEngine,
    item_factory: Callable[..., dict[str, Any]],
) -> None:
    ledger = DedupLedger()
    ledger.admit("A|B", TS)
    table = FrequencyTable({"A|B": 1})

    result = engine.process([item_factory("A", "B", "C")], ledger, table)

    assert {r.brokers for r in result.new_records} == {("A", "C"), ("B", "C"), ("A", "B", "C")}
    assert table.get("A|B") == 1


def test_process_records_accepts_parsed_records(engine: AggregationEngine) -> None:
    ledger, table = DedupLedger(), FrequencyTable()
    records = [SurebetRecord(brokers=("B", "A"), timestamp=TS), SurebetRecord(brokers=("A",), timestamp=TS)]

    result = engine.process_records(records, ledger, table)

    assert result.new_records == [AggregatedRecord(brokers=("A", "B"), timestamp=TS)]
    assert result.stats.records_insufficient_brokers == 1


def test_fingerprint_error_propagates(engine: AggregationEngine) -> None:
    ledger, table = DedupLedger(), FrequencyTable()
    records = [SurebetRecord(brokers=("A", "B\ud800"), timestamp=TS)]

    with pytest.raises(FingerprintError):
        engine.process_records(records, ledger, table)


def test_empty_batch(engine: AggregationEngine) -> None:
    result = engine.process([], DedupLedger(), FrequencyTable())
    assert result.new_records == []
    assert result.stats.records_total == 0
