"""Loads and persists the FrequencyTable under the `comboCounts` key."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from surebet_aggregator.exceptions import (
    CorruptStateError,
    StateError,
    StateLoadError,
    StatePersistError,
)
from surebet_aggregator.persistence.repositories.interfaces.key_value_store import IKeyValueStore
from surebet_aggregator.services.frequency.frequency_table import FrequencyTable

COMBO_COUNTS_KEY = "comboCounts"


def _validate_counts(value: Any, store: str) -> dict[str, int]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CorruptStateError(
            f"{COMBO_COUNTS_KEY} must be an object, got {type(value).__name__}",
            store=store,
            key=COMBO_COUNTS_KEY,
        )
    counts: dict[str, int] = {}
    for key, count in value.items():
        # bool is an int subclass; reject it explicitly
        if not isinstance(key, str) or isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise CorruptStateError(
                f"{COMBO_COUNTS_KEY}[{key!r}] must be a non-negative integer, got {count!r}",
                store=store,
                key=COMBO_COUNTS_KEY,
            )
        counts[key] = count
    return counts


class FrequencyTableRepository:
    """Bulk read/write of the per-combination counts (full snapshot, never a delta)."""

    def __init__(
        self,
        store: IKeyValueStore,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._store = store
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def key(self) -> str:
        return COMBO_COUNTS_KEY

    async def load(self) -> FrequencyTable:
        """Return the persisted table; absent state is an empty table.

        Raises:
            CorruptStateError: If the stored value is not a str -> non-negative int mapping.
            StateLoadError: If the store cannot be read.
        """
        try:
            raw = await self._store.get_value(COMBO_COUNTS_KEY)
        except StateError:
            raise
        except Exception as e:
            raise StateLoadError(
                f"cannot load {COMBO_COUNTS_KEY} from {self._store.name}: {e}",
                store=self._store.name,
                key=COMBO_COUNTS_KEY,
            ) from e
        table = FrequencyTable(_validate_counts(raw, self._store.name))
        self._logger.info(
            "frequency_table_loaded",
            store=self._store.name,
            combos=len(table),
            cold_start=raw is None,
        )
        return table

    async def save(self, table: FrequencyTable) -> None:
        """Replace the persisted counts with the full current mapping.

        Raises:
            StatePersistError: If the store write fails.
        """
        snapshot = table.snapshot()
        try:
            await self._store.set_value(COMBO_COUNTS_KEY, snapshot)
        except StatePersistError:
            raise
        except Exception as e:
            raise StatePersistError(
                f"cannot persist {COMBO_COUNTS_KEY} to {self._store.name}: {e}",
                key=COMBO_COUNTS_KEY,
            ) from e
        self._logger.info("frequency_table_persisted", store=self._store.name, combos=len(snapshot))
