"""Persisted-state exceptions (dedup ledger, frequency table, results sink)."""

from __future__ import annotations

from collections.abc import Sequence


class StateError(Exception):
    """Base exception for persisted state operations."""


class StateLoadError(StateError):
    """Raised when a store cannot be read."""

    def __init__(self, message: str, *, store: str | None = None, key: str | None = None) -> None:
        super().__init__(message)
        self.store = store
        self.key = key


class CorruptStateError(StateLoadError):
    """Raised when a persisted value exists but has the wrong shape."""


class StatePersistError(StateError):
    """Raised when a store cannot be written.

    persisted lists the state keys already written during this run, so callers
    can tell a clean failure from a half-committed one.
    """

    def __init__(self, message: str, *, key: str | None = None, persisted: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.key = key
        self.persisted = tuple(persisted)
