# -*- coding: utf-8 -*-
"""Cross-run deduplication of (combination, timestamp) occurrences."""

from surebet_aggregator.services.dedup.dedup_ledger import DedupLedger

__all__ = ["DedupLedger"]
