"""Fold API responses into the per-location minimized series.

The minimized document looks like::

    {"dataforlocations": {"48.25,16.40": [{"startTime": "...", "temperature": 5.0}, ...]}}

Each location holds at most one record per ``startTime``. A later response
only overwrites the attributes it actually carries (non-null), so the daily
request's ``sunriseTime`` survives the next hourly request for the same
timestamp and vice versa.

New records are appended, not inserted in order: the stored list is in
insertion order and readers sort by ``startTime`` themselves.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from netterwetter.schemas import TimelineInterval, iter_intervals


def merge_intervals(
    records: list[dict[str, Any]],
    intervals: Iterable[TimelineInterval],
) -> int:
    """Merge intervals into one location's record list in place.

    Lookup is a linear scan by ``startTime`` string equality.

    Returns:
        Number of records appended.
    """
    added = 0
    for interval in intervals:
        values = interval.non_null_values()

        existing: dict[str, Any] | None = None
        for record in records:
            if record.get("startTime") == interval.start_time:
                existing = record
                break

        if existing is None:
            records.append({"startTime": interval.start_time, **values})
            added += 1
        else:
            existing.update(values)
    return added


def merge_api_data(
    minimized: dict[str, Any],
    location: str,
    response: dict[str, Any],
) -> int:
    """Merge one timelines response for ``location`` into ``minimized``.

    The location's list is created if missing, even when the response turns
    out to hold no usable intervals. Merging the same response twice leaves
    the document as after the first merge.

    Returns:
        Number of new records (timestamps not seen before for this location).
    """
    by_location: dict[str, list[dict[str, Any]]] = minimized.setdefault("dataforlocations", {})
    records = by_location.setdefault(location, [])
    return merge_intervals(records, iter_intervals(response))
