"""AggregatedRecord: one newly admitted (combination, timestamp) occurrence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class AggregatedRecord:
    """Row appended to the results sink. Never read back by the engine."""

    brokers: tuple[str, ...]
    """Canonical (sorted) combination of at least two brokers."""
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        """Sink payload: {"brokers": [...], "timestamp": "..."}."""
        return {"brokers": list(self.brokers), "timestamp": self.timestamp}

