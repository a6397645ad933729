"""SurebetRecord: validated input record (brokers quoted for one opportunity + timestamp).

Built by services.ingestion.record_parser from loosely-typed upstream items.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SurebetRecord:
    """One surebet opportunity after parsing.

    brokers keeps upstream order with duplicates removed (first occurrence wins).
    """

    brokers: tuple[str, ...]
    """Distinct broker identifiers, upstream order."""
    timestamp: str
    """ISO-8601 string: the upstream `date` verbatim, or ingestion time if it was missing/invalid."""
    timestamp_defaulted: bool = False
    """True when timestamp is the ingestion-time fallback (non-deterministic across runs)."""
    is_surebet: bool | None = None
    """Upstream allocation.isSurebet flag, if present. Informational only."""

    @property
    def broker_count(self) -> int:
        return len(self.brokers)
