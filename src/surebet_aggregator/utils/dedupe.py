"""Deduplication keys for broker combinations."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

from surebet_aggregator.exceptions import FingerprintError

DEFAULT_DELIMITER = "|"


def candidate_key(combination: Sequence[str], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Return the frequency-table key for a canonical (sorted) combination, e.g. 'A|B|C'."""
    return delimiter.join(combination)


def fingerprint(key: str, timestamp: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Return the SHA-256 hex digest identifying (candidate key, timestamp).

    The digest input is f"{key}{delimiter}{timestamp}" encoded as UTF-8, so hashes
    stay compatible with ledgers written by earlier runs.

    Raises:
        FingerprintError: If the input cannot be encoded (e.g. lone surrogates).
    """
    material = f"{key}{delimiter}{timestamp}"
    try:
        data = material.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FingerprintError(f"cannot fingerprint {key!r} at {timestamp!r}: {e}") from e
    return hashlib.sha256(data).hexdigest()
