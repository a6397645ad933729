"""FrequencyTable: cumulative occurrence count per candidate key across all runs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class FrequencyTable:
    """Mapping candidate key -> count. Counts only go up; keys are never removed."""

    def __init__(self, counts: Mapping[str, int] | None = None) -> None:
        self._counts: dict[str, int] = dict(counts or {})
        self._incremented_keys: set[str] = set()

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def get(self, key: str) -> int:
        """Current count for key (0 if never seen)."""
        return self._counts.get(key, 0)

    def increment(self, key: str) -> int:
        """Add 1 to key's count (creating it at 1). Returns the new count."""
        value = self._counts.get(key, 0) + 1
        self._counts[key] = value
        self._incremented_keys.add(key)
        return value

    @property
    def touched_keys(self) -> frozenset[str]:
        """Keys incremented since load."""
        return frozenset(self._incremented_keys)

    def snapshot(self) -> dict[str, int]:
        """Full mapping copy for persistence (not a delta)."""
        return dict(self._counts)
