# -*- coding: utf-8 -*-
"""AggregationEngine: records -> combinations -> dedup admission -> frequency + output.

Pure in-memory pass over one batch. The ledger and table are passed in by the
caller (loaded once per run) and mutated in place; nothing here performs I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

import structlog

from surebet_aggregator.exceptions import CombinationLimitExceededError
from surebet_aggregator.models.aggregated_record import AggregatedRecord
from surebet_aggregator.models.surebet_record import SurebetRecord
from surebet_aggregator.services.combinations.combination_generator import (
    MIN_COMBINATION_SIZE,
    CombinationGenerator,
)
from surebet_aggregator.services.dedup.dedup_ledger import DedupLedger
from surebet_aggregator.services.frequency.frequency_table import FrequencyTable
from surebet_aggregator.services.ingestion.record_parser import parse_item, utc_now
from surebet_aggregator.utils.dedupe import DEFAULT_DELIMITER, candidate_key


@dataclass
class EngineStats:
    """Counters for one batch."""

    records_total: int = 0
    records_malformed: int = 0
    records_insufficient_brokers: int = 0
    records_over_limit: int = 0
    records_contributing: int = 0
    outcomes_skipped: int = 0
    timestamps_defaulted: int = 0
    combinations_generated: int = 0
    combinations_admitted: int = 0
    combinations_duplicate: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class EngineResult:
    """New (combination, timestamp) rows admitted in this batch, in admission order."""

    new_records: list[AggregatedRecord]
    stats: EngineStats = field(default_factory=EngineStats)


class AggregationEngine:
    """Runs the per-record combination / dedup / frequency loop."""

    def __init__(
        self,
        generator: CombinationGenerator,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        clock: Callable[[], datetime] = utc_now,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            generator: Combination generator holding the broker cap.
            delimiter: Candidate key delimiter (must match the ledger's).
            clock: UTC clock for records without a usable date.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._generator = generator
        self._delimiter = delimiter
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def process(
        self,
        items: Iterable[Any],
        ledger: DedupLedger,
        table: FrequencyTable,
    ) -> EngineResult:
        """Parse raw items and admit every new (combination, timestamp) pair.

        Malformed items, items with fewer than two brokers and items above the
        broker cap are skipped and counted. A FingerprintError propagates: the
        caller must not persist anything in that case.
        """
        stats = EngineStats()
        new_records: list[AggregatedRecord] = []
        for item in items:
            stats.records_total += 1
            parsed = parse_item(item, clock=self._clock, delimiter=self._delimiter)
            stats.outcomes_skipped += parsed.skipped_outcomes
            if parsed.record is None:
                stats.records_malformed += 1
                self._logger.debug("record_skipped_malformed", record_index=stats.records_total - 1)
                continue
            self._process_record(parsed.record, ledger, table, stats, new_records)
        return EngineResult(new_records=new_records, stats=stats)

    def process_records(
        self,
        records: Iterable[SurebetRecord],
        ledger: DedupLedger,
        table: FrequencyTable,
    ) -> EngineResult:
        """Same as process() for records that are already parsed."""
        stats = EngineStats()
        new_records: list[AggregatedRecord] = []
        for record in records:
            stats.records_total += 1
            self._process_record(record, ledger, table, stats, new_records)
        return EngineResult(new_records=new_records, stats=stats)

    def _process_record(
        self,
        record: SurebetRecord,
        ledger: DedupLedger,
        table: FrequencyTable,
        stats: EngineStats,
        out: list[AggregatedRecord],
    ) -> None:
        if record.broker_count < MIN_COMBINATION_SIZE:
            stats.records_insufficient_brokers += 1
            return
        try:
            combinations = self._generator.generate(record.brokers)
        except CombinationLimitExceededError as e:
            stats.records_over_limit += 1
            self._logger.warning(
                "record_skipped_over_broker_limit",
                broker_count=e.count,
                broker_limit=e.limit,
                record_timestamp=record.timestamp,
            )
            return

        stats.records_contributing += 1
        if record.timestamp_defaulted:
            stats.timestamps_defaulted += 1
        stats.combinations_generated += len(combinations)
        self._logger.debug(
            "record_combinations_generated",
            record_timestamp=record.timestamp,
            broker_count=record.broker_count,
            combination_count=len(combinations),
        )

        for combination in combinations:
            key = candidate_key(combination, self._delimiter)
            if not ledger.admit(key, record.timestamp):
                stats.combinations_duplicate += 1
                continue
            table.increment(key)
            out.append(AggregatedRecord(brokers=combination, timestamp=record.timestamp))
            stats.combinations_admitted += 1
