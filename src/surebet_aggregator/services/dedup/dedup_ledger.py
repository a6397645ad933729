# -*- coding: utf-8 -*-
"""DedupLedger: in-memory set of (combination, timestamp) fingerprints seen by any run.

Loaded once at run start and persisted once at run end by DedupLedgerRepository;
admit() never performs I/O.
"""

from __future__ import annotations

from collections.abc import Iterable

from surebet_aggregator.utils.dedupe import DEFAULT_DELIMITER, fingerprint


class DedupLedger:
    """Insertion-ordered set of fingerprints. Grows monotonically, never shrinks."""

    def __init__(
        self,
        seen: Iterable[str] = (),
        *,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        """Initialize from previously persisted fingerprints (empty on cold start).

        Args:
            seen: Hex fingerprints from the last persisted state. Repeats are collapsed.
            delimiter: Separator between candidate key and timestamp in the digest input.
        """
        # dict keeps insertion order for stable exports
        self._seen: dict[str, None] = dict.fromkeys(seen)
        self._delimiter = delimiter
        self._admitted_this_run = 0

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, fp: object) -> bool:
        return fp in self._seen

    @property
    def admitted_count(self) -> int:
        """Fingerprints added since this instance was loaded."""
        return self._admitted_this_run

    def fingerprint(self, key: str, timestamp: str) -> str:
        return fingerprint(key, timestamp, self._delimiter)

    def admit(self, key: str, timestamp: str) -> bool:
        """Record (key, timestamp) as seen.

        Returns:
            True if the fingerprint was new (and is now recorded), False if it
            was already present (no mutation).

        Raises:
            FingerprintError: If hashing fails; the run must abort before persisting.
        """
        fp = self.fingerprint(key, timestamp)
        if fp in self._seen:
            return False
        self._seen[fp] = None
        self._admitted_this_run += 1
        return True

    def export(self) -> list[str]:
        """All fingerprints in insertion order (prior state first, then this run's)."""
        return list(self._seen)
