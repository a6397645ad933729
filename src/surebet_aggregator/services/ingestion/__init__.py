"""Raw item sources and record parsing."""

from surebet_aggregator.services.ingestion.record_parser import (
    ParseResult,
    parse_item,
    parse_record,
)
from surebet_aggregator.services.ingestion.record_sources import (
    IRecordSource,
    JsonFileRecordSource,
    ScraperTaskRecordSource,
)

__all__ = [
    "IRecordSource",
    "JsonFileRecordSource",
    "ParseResult",
    "ScraperTaskRecordSource",
    "parse_item",
    "parse_record",
]
