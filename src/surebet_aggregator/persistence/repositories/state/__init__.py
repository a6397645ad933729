"""Repositories for the two persisted aggregates (dedup ledger, frequency table)."""

from surebet_aggregator.persistence.repositories.state.dedup_ledger_repository import (
    SEEN_HASHES_KEY,
    DedupLedgerRepository,
)
from surebet_aggregator.persistence.repositories.state.frequency_table_repository import (
    COMBO_COUNTS_KEY,
    FrequencyTableRepository,
)

__all__ = [
    "COMBO_COUNTS_KEY",
    "SEEN_HASHES_KEY",
    "DedupLedgerRepository",
    "FrequencyTableRepository",
]
