"""Shared UTC timestamp and label helpers for renderers."""

from __future__ import annotations

from datetime import UTC, datetime

SECONDS_PER_DAY = 86400


def parse_timestamp(value: object) -> int | None:
    """Parse an ISO-8601 timestamp to epoch seconds (naive means UTC).

    Returns None for anything that isn't a parseable string.
    """
    if not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())


def day_start(ts: int) -> int:
    """UTC midnight at or before ``ts``."""
    return ts - ts % SECONDS_PER_DAY


def clock_label(ts: int) -> str:
    """``HH:MM`` in UTC, e.g. ``06:42``."""
    return datetime.fromtimestamp(ts, UTC).strftime("%H:%M")


def day_label(ts: int) -> str:
    """Weekday and date without zero padding, e.g. ``Friday 4.7.2025``."""
    dt = datetime.fromtimestamp(ts, UTC)
    return f"{dt.strftime('%A')} {dt.day}.{dt.month}.{dt.year}"
