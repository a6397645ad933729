"""Surebet aggregator: broker-combination dedup and frequency tracking over scraper runs."""

from surebet_aggregator.config import get_settings
from surebet_aggregator.DI import Container
from surebet_aggregator.services import (
    AggregationEngine,
    AggregationRunner,
    CombinationGenerator,
    DedupLedger,
    FrequencyTable,
    generate_combinations,
)

__version__ = "0.0.1"
__all__ = [
    "AggregationEngine",
    "AggregationRunner",
    "CombinationGenerator",
    "Container",
    "DedupLedger",
    "FrequencyTable",
    "generate_combinations",
    "get_settings",
]
