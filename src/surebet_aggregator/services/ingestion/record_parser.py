"""Lenient parsing of raw scraper items into SurebetRecord.

Malformed shapes are filtered (None / skipped entries), never raised.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, cast

from surebet_aggregator.models.surebet_record import SurebetRecord
from surebet_aggregator.utils.dedupe import DEFAULT_DELIMITER
from surebet_aggregator.utils.validation import format_utc_iso, is_iso_timestamp


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one raw item."""

    record: SurebetRecord | None
    """None when the item itself is malformed (not an object / no outcomes list)."""
    skipped_outcomes: int = 0
    """Outcome entries dropped (not an object, blank broker, delimiter in broker, unencodable broker)."""


def _is_encodable(text: str) -> bool:
    """Lone surrogates survive json.loads but cannot be hashed or stored as UTF-8."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _extract_broker(outcome: Any, delimiter: str) -> str | None:
    if not isinstance(outcome, Mapping):
        return None
    broker = cast(Mapping[str, Any], outcome).get("broker")
    if not isinstance(broker, str):
        return None
    broker = broker.strip()
    if not broker or delimiter in broker or not _is_encodable(broker):
        return None
    return broker


def _extract_is_surebet(item: Mapping[str, Any]) -> bool | None:
    allocation = item.get("allocation")
    if isinstance(allocation, Mapping):
        flag = cast(Mapping[str, Any], allocation).get("isSurebet")
        if isinstance(flag, bool):
            return flag
    return None


def parse_item(
    item: Any,
    *,
    clock: Callable[[], datetime] = utc_now,
    delimiter: str = DEFAULT_DELIMITER,
) -> ParseResult:
    """Parse one raw item.

    Brokers keep upstream order, first occurrence wins. `date` is kept verbatim,
    surrounding whitespace included, when it is a well-formed ISO-8601 string (so
    fingerprints match earlier runs); otherwise the ingestion time from clock() is used.
    """
    if not isinstance(item, Mapping):
        return ParseResult(record=None)
    data = cast(Mapping[str, Any], item)
    outcomes = data.get("outcomes")
    if not isinstance(outcomes, list):
        return ParseResult(record=None)

    brokers: dict[str, None] = {}
    skipped = 0
    for outcome in cast(list[Any], outcomes):
        broker = _extract_broker(outcome, delimiter)
        if broker is None:
            skipped += 1
            continue
        brokers.setdefault(broker, None)

    date = data.get("date")
    if is_iso_timestamp(date) and _is_encodable(cast(str, date)):
        timestamp = cast(str, date)
        defaulted = False
    else:
        timestamp = format_utc_iso(clock())
        defaulted = True

    return ParseResult(
        record=SurebetRecord(
            brokers=tuple(brokers),
            timestamp=timestamp,
            timestamp_defaulted=defaulted,
            is_surebet=_extract_is_surebet(data),
        ),
        skipped_outcomes=skipped,
    )


def parse_record(
    item: Any,
    *,
    clock: Callable[[], datetime] = utc_now,
    delimiter: str = DEFAULT_DELIMITER,
) -> SurebetRecord | None:
    """Parse one raw item; None if malformed."""
    return parse_item(item, clock=clock, delimiter=delimiter).record
