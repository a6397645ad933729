"""Validation helpers for upstream timestamps and identifiers."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def is_iso_timestamp(value: Any) -> bool:
    """Return True if value is a non-empty ISO-8601 date/datetime string."""
    if not isinstance(value, str):
        return False
    s = value.strip()
    if not s:
        return False
    try:
        datetime.fromisoformat(s)
        return True
    except ValueError:
        return False


def format_utc_iso(moment: datetime) -> str:
    """Format as UTC with millisecond precision and a Z suffix (2024-01-01T00:00:00.000Z)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def mask_token(token: str | None) -> str:
    """Return a masked secret for logging (e.g. apify_...wxyz)."""
    if not token or len(token) < 10:
        return "***"
    return f"{token[:6]}...{token[-4:]}"
