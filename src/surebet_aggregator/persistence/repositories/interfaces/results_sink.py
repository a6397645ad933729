"""Abstract interface for the append-only results sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IResultsSink(ABC):
    """Append-only destination for aggregated records. Append order is preserved."""

    @abstractmethod
    async def append(self, record: dict[str, Any]) -> None:
        """Append one record ({"brokers": [...], "timestamp": "..."})."""
        ...

    async def append_batch(self, records: list[dict[str, Any]]) -> None:
        """Append multiple records. Default impl calls append() for each."""
        for record in records:
            await self.append(record)
