"""
Models for the upstream API payloads and the raw response log.

Responses are kept as plain dicts on disk (the raw log stores them verbatim);
these models give the merge step a total accessor over the nested, optional
structure::

    {"data": {"timelines": [{"intervals": [{"startTime": ..., "values": {...}}]}]}}

Anything missing or of the wrong type is reported as "absent", never raised.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class TimelineInterval(BaseModel):
    """One timestamped set of values from a timeline."""

    model_config = ConfigDict(extra="ignore")

    start_time: str = Field(..., alias="startTime", description="ISO-8601 UTC timestamp")
    values: dict[str, Any] = Field(..., description="Metric name -> value (may be null)")

    def non_null_values(self) -> dict[str, Any]:
        """Values that carry information (nulls never overwrite stored data)."""
        return {k: v for k, v in self.values.items() if v is not None}


class RawResponseEntry(BaseModel):
    """One row of the monthly raw response log."""

    model_config = ConfigDict(populate_by_name=True)

    request_time: str = Field(..., alias="requestTime")
    queried_attributes: str = Field(..., alias="queriedAttributes")
    received_data: dict[str, Any] = Field(..., alias="receivedData")

    def to_json(self) -> dict[str, Any]:
        """Serialize with the on-disk (camelCase) field names."""
        return self.model_dump(by_alias=True)


def _child(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def iter_intervals(response: Any) -> Iterator[TimelineInterval]:
    """Yield every well-formed interval of a timelines response.

    Skips silently: a missing ``data.timelines`` list, timelines without an
    ``intervals`` list, and intervals lacking ``startTime`` or ``values``.
    """
    timelines = _child(_child(response, "data"), "timelines")
    if not isinstance(timelines, list):
        return

    for timeline in timelines:
        intervals = _child(timeline, "intervals")
        if not isinstance(intervals, list):
            continue
        for raw in intervals:
            try:
                interval = TimelineInterval.model_validate(raw)
            except ValidationError:
                continue
            yield interval
