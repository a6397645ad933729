# -*- coding: utf-8 -*-
"""In-memory key-value store (tests and dry runs)."""

from __future__ import annotations

import copy
from typing import Any

from surebet_aggregator.persistence.repositories.interfaces.key_value_store import IKeyValueStore


class InMemoryKeyValueStore(IKeyValueStore):
    """In-memory implementation of IKeyValueStore. Values are deep-copied in and out."""

    def __init__(self, name: str = "memory", initial: dict[str, Any] | None = None) -> None:
        self._name = name
        self._store: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    @property
    def name(self) -> str:
        return self._name

    async def get_value(self, key: str) -> Any | None:
        value = self._store.get(key)
        return copy.deepcopy(value)

    async def set_value(self, key: str, value: Any) -> None:
        self._store[key] = copy.deepcopy(value)
