"""Charted metrics and their value ranges.

Each metric gets its own vertical scale. The range policy per metric:
  - humidity is a percentage and always spans 0-100
  - wind and precipitation can't be negative, so their scale starts at 0
  - wind speed and wind gust share one scale (rounded up to 5 m/s)
  - precipitation is rounded up to 2 mm/h
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Metric:
    """Display and scaling settings for one metric."""

    key: str
    label: str
    color: str
    unit: str
    stroke_width: float
    fixed_range: tuple[float, float] | None = None
    floor_zero: bool = False
    round_to: float | None = None
    scale_group: str | None = None


@dataclass(frozen=True)
class MetricRange:
    """Value range of a metric on the chart."""

    min: float
    max: float

    def y(self, value: float, top: float, plot_height: float) -> float:
        """Vertical pixel position of ``value`` (higher values render higher)."""
        return top + (1 - (value - self.min) / (self.max - self.min)) * plot_height

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}


# Drawing order: later metrics are painted on top
METRICS: list[Metric] = [
    Metric("windGust", "Wind Gust (m/s)", "#AAA", "m/s", 1.5,
           floor_zero=True, round_to=5, scale_group="wind"),
    Metric("windSpeed", "Wind (m/s)", "#FFF", "m/s", 1.5,
           floor_zero=True, round_to=5, scale_group="wind"),
    Metric("humidity", "Humidity (%)", "#00B0FF", "%", 1.5, fixed_range=(0, 100)),
    Metric("precipitationIntensity", "Precip (mm/h)", "#0D47A1", "mm/h", 3,
           floor_zero=True, round_to=2),
    Metric("temperatureApparent", "Apparent Temp (°C)", "#FFD600", "°C", 4),
    Metric("temperature", "Temperature (°C)", "#FF9800", "°C", 2),
]  # fmt: skip


def is_number(value: Any) -> bool:
    """True for ints and floats (bools and numeric strings don't count)."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def numeric_values(rows: list[dict[str, Any]], key: str) -> list[float]:
    """All numeric values of ``key`` across ``rows``."""
    return [row[key] for row in rows if is_number(row.get(key))]


def round_up(value: float, step: float) -> float:
    """Round ``value`` up to the next multiple of ``step``."""
    return math.ceil(value / step) * step


def compute_ranges(
    rows: list[dict[str, Any]],
    metrics: list[Metric] = METRICS,
) -> dict[str, MetricRange]:
    """Compute the vertical range of every metric over the full series."""
    # Metrics in the same scale group share the maximum over all their values
    group_max: dict[str, float] = {}
    for metric in metrics:
        if metric.scale_group is None:
            continue
        values = numeric_values(rows, metric.key)
        if values:
            current = group_max.get(metric.scale_group)
            group_max[metric.scale_group] = max(values) if current is None else max(current, *values)

    ranges: dict[str, MetricRange] = {}
    for metric in metrics:
        if metric.fixed_range is not None:
            ranges[metric.key] = MetricRange(*metric.fixed_range)
            continue

        values = numeric_values(rows, metric.key)
        lo = min(values) if values else 0
        hi = max(values) if values else 0
        if metric.floor_zero:
            lo = 0
        if metric.scale_group is not None:
            hi = group_max.get(metric.scale_group, 0)
        if metric.round_to is not None:
            hi = round_up(hi, metric.round_to)
        if hi == lo:
            hi = lo + 1  # avoid division by zero
        ranges[metric.key] = MetricRange(lo, hi)
    return ranges
