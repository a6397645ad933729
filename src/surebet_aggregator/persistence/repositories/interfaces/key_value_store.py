"""Abstract interface for a key-value store holding whole JSON values (in-memory, files, Apify)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IKeyValueStore(ABC):
    """Named store of JSON-serializable values, each read and replaced wholesale."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name (for logs and errors)."""
        ...

    @abstractmethod
    async def get_value(self, key: str) -> Any | None:
        """Return the last value set under key, or None if never set."""
        ...

    @abstractmethod
    async def set_value(self, key: str, value: Any) -> None:
        """Replace the value under key. Readers see either the old or the new value, never a mix."""
        ...
