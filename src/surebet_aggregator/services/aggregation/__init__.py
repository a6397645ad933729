# -*- coding: utf-8 -*-
"""Per-run orchestration of the combination / dedup / frequency engine."""

from surebet_aggregator.services.aggregation.aggregation_engine import (
    AggregationEngine,
    EngineResult,
    EngineStats,
)
from surebet_aggregator.services.aggregation.aggregation_runner import (
    AggregationRunner,
    RunSummary,
)

__all__ = [
    "AggregationEngine",
    "AggregationRunner",
    "EngineResult",
    "EngineStats",
    "RunSummary",
]
