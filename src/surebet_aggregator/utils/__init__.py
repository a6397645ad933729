# -*- coding: utf-8 -*-
"""Utility modules."""

from surebet_aggregator.utils.dedupe import DEFAULT_DELIMITER, candidate_key, fingerprint
from surebet_aggregator.utils.validation import (
    format_utc_iso,
    is_iso_timestamp,
    mask_token,
)

__all__ = [
    "DEFAULT_DELIMITER",
    "candidate_key",
    "fingerprint",
    "format_utc_iso",
    "is_iso_timestamp",
    "mask_token",
]
