# -*- coding: utf-8 -*-
"""Loads and persists the DedupLedger under the `seenHashes` key."""

from __future__ import annotations

import re
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
from surebet_aggregator.services.dedup.dedup_ledger import DedupLedger
from surebet_aggregator.utils.dedupe import DEFAULT_DELIMITER

SEEN_HASHES_KEY = "seenHashes"

_SHA256_HEX = re.compile(r"^[0-9a-f]{64}$")


def _validate_seen(value: Any, store: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise CorruptStateError(
            f"{SEEN_HASHES_KEY} must be a list, got {type(value).__name__}",
            store=store,
            key=SEEN_HASHES_KEY,
        )
    for i, item in enumerate(value):
        if not isinstance(item, str) or not _SHA256_HEX.match(item):
            raise CorruptStateError(
                f"{SEEN_HASHES_KEY}[{i}] is not a sha256 hex digest: {item!r}",
                store=store,
                key=SEEN_HASHES_KEY,
            )
    return value


class DedupLedgerRepository:
    """Bulk read/write of the fingerprint ledger. One load at run start, one save at run end."""

    def __init__(
        self,
        store: IKeyValueStore,
        *,
        delimiter: str = DEFAULT_DELIMITER,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._store = store
        self._delimiter = delimiter
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def key(self) -> str:
        return SEEN_HASHES_KEY

    async def load(self) -> DedupLedger:
        """Return the persisted ledger; absent or empty state is a cold start.

        Raises:
            CorruptStateError: If the stored value is not a list of sha256 hex strings.
            StateLoadError: If the store cannot be read.
        """
        try:
            raw = await self._store.get_value(SEEN_HASHES_KEY)
        except StateError:
            raise
        except Exception as e:
            raise StateLoadError(
                f"cannot load {SEEN_HASHES_KEY} from {self._store.name}: {e}",
                store=self._store.name,
                key=SEEN_HASHES_KEY,
            ) from e
        seen = _validate_seen(raw, self._store.name)
        ledger = DedupLedger(seen, delimiter=self._delimiter)
        self._logger.info(
            "dedup_ledger_loaded",
            store=self._store.name,
            seen_hashes=len(ledger),
            cold_start=raw is None,
        )
        return ledger

    async def save(self, ledger: DedupLedger) -> None:
        """Replace the persisted ledger with the full current set (insertion order).

        Raises:
            StatePersistError: If the store write fails.
        """
        exported = ledger.export()
        try:
            await self._store.set_value(SEEN_HASHES_KEY, exported)
        except StatePersistError:
            raise
        except Exception as e:
            raise StatePersistError(
                f"cannot persist {SEEN_HASHES_KEY} to {self._store.name}: {e}",
                key=SEEN_HASHES_KEY,
            ) from e
        self._logger.info("dedup_ledger_persisted", store=self._store.name, seen_hashes=len(exported))
