# -*- coding: utf-8 -*-
"""AggregationRunner: one run = load state, fetch, process, flush results, persist state.

The two state writes happen only after every item was processed and the results
were flushed; any earlier failure leaves both stores exactly as they were.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars

from surebet_aggregator.exceptions import StatePersistError
from surebet_aggregator.services.aggregation.aggregation_engine import (
    AggregationEngine,
    EngineStats,
)
from surebet_aggregator.services.dedup.dedup_ledger import DedupLedger
from surebet_aggregator.services.frequency.frequency_table import FrequencyTable

if TYPE_CHECKING:
    from surebet_aggregator.persistence.repositories.interfaces.results_sink import IResultsSink
    from surebet_aggregator.persistence.repositories.state import (
        DedupLedgerRepository,
        FrequencyTableRepository,
    )
    from surebet_aggregator.services.ingestion.record_sources import IRecordSource


@dataclass(frozen=True)
class RunSummary:
    """Result of a completed run."""

    run_id: str
    items_fetched: int
    new_records: int
    seen_hashes_added: int
    seen_hashes_total: int
    combos_incremented: int
    combos_tracked: int
    stats: EngineStats
    started_at: datetime
    finished_at: datetime


class AggregationRunner:
    """Composes source, state repositories, engine and results sink for a single run."""

    def __init__(
        self,
        source: IRecordSource,
        ledger_repository: DedupLedgerRepository,
        frequency_repository: FrequencyTableRepository,
        results_sink: IResultsSink,
        engine: AggregationEngine,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            source: Raw item source (scraper task, file, ...).
            ledger_repository: Loads/persists the dedup ledger.
            frequency_repository: Loads/persists the frequency table.
            results_sink: Append-only destination for new records.
            engine: Pure combination/dedup/frequency engine.
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._source = source
        self._ledger_repo = ledger_repository
        self._frequency_repo = frequency_repository
        self._sink = results_sink
        self._engine = engine
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run(self) -> RunSummary:
        """Execute one run.

        Raises:
            StateLoadError: A store could not be read or holds a corrupt value.
            StatePersistError: A state write failed. `persisted` names the keys
                already written (the ledger may be ahead of the counts).
            FingerprintError, ApifyAPIError, ScraperRunError: Fatal before any write.
        """
        run_id = uuid.uuid4().hex[:12]
        started_at = datetime.now(UTC)
        with bound_contextvars(run_id=run_id):
            self._logger.info("run_started")
            try:
                ledger = await self._ledger_repo.load()
                table = await self._frequency_repo.load()

                items = await self._source.fetch()
                result = self._engine.process(items, ledger, table)
                stats = result.stats
                self._logger.info(
                    "run_batch_processed",
                    items_fetched=len(items),
                    new_records=len(result.new_records),
                    **stats.to_dict(),
                )
                if stats.timestamps_defaulted:
                    self._logger.warning(
                        "run_timestamps_defaulted_to_ingestion_time",
                        records=stats.timestamps_defaulted,
                    )

                await self._sink.append_batch([r.to_dict() for r in result.new_records])
                self._logger.info("run_results_flushed", new_records=len(result.new_records))

                await self._persist(ledger, table)
            except Exception as e:
                self._logger.error(
                    "run_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            summary = RunSummary(
                run_id=run_id,
                items_fetched=len(items),
                new_records=len(result.new_records),
                seen_hashes_added=ledger.admitted_count,
                seen_hashes_total=len(ledger),
                combos_incremented=len(table.touched_keys),
                combos_tracked=len(table),
                stats=stats,
                started_at=started_at,
                finished_at=datetime.now(UTC),
            )
            self._logger.info(
                "run_finished",
                new_records=summary.new_records,
                seen_hashes_added=summary.seen_hashes_added,
                seen_hashes_total=summary.seen_hashes_total,
                combos_incremented=summary.combos_incremented,
                combos_tracked=summary.combos_tracked,
            )
            return summary

    async def _persist(self, ledger: DedupLedger, table: FrequencyTable) -> None:
        """Write the ledger, then the table. Treated as one logical commit."""
        await self._ledger_repo.save(ledger)
        try:
            await self._frequency_repo.save(table)
        except StatePersistError as e:
            self._logger.error(
                "run_state_partially_persisted",
                persisted=[self._ledger_repo.key],
                failed=self._frequency_repo.key,
                message="dedup ledger includes this run but frequency counts do not",
            )
            raise StatePersistError(
                str(e),
                key=self._frequency_repo.key,
                persisted=[self._ledger_repo.key],
            ) from e
