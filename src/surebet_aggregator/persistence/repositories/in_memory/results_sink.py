"""In-memory results sink."""

from __future__ import annotations

from typing import Any

from surebet_aggregator.persistence.repositories.interfaces.results_sink import IResultsSink


class InMemoryResultsSink(IResultsSink):
    """Keeps appended records in a list (inspectable via .items)."""

    def __init__(self) -> None:
        self._items: list[dict[str, Any]] = []

    @property
    def items(self) -> list[dict[str, Any]]:
        return list(self._items)

    async def append(self, record: dict[str, Any]) -> None:
        self._items.append(dict(record))

    async def append_batch(self, records: list[dict[str, Any]]) -> None:
        self._items.extend(dict(r) for r in records)
