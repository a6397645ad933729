# -*- coding: utf-8 -*-
"""Application services."""

from surebet_aggregator.services.combinations import CombinationGenerator, generate_combinations
from surebet_aggregator.services.dedup import DedupLedger
from surebet_aggregator.services.frequency import FrequencyTable
from surebet_aggregator.services.ingestion import (
    IRecordSource,
    JsonFileRecordSource,
    ScraperTaskRecordSource,
    parse_record,
)
from surebet_aggregator.services.aggregation import (
    AggregationEngine,
    AggregationRunner,
    EngineResult,
    EngineStats,
    RunSummary,
)

__all__ = [
    "AggregationEngine",
    "AggregationRunner",
    "CombinationGenerator",
    "DedupLedger",
    "EngineResult",
    "EngineStats",
    "FrequencyTable",
    "IRecordSource",
    "JsonFileRecordSource",
    "RunSummary",
    "ScraperTaskRecordSource",
    "generate_combinations",
    "parse_record",
]
