"""Weather chart renderer: merged series -> SVG line chart.

Geometry:
  - every UTC day is a fixed-width column starting at 00:00
  - within a day, time maps linearly to x
  - every metric has its own vertical range (see ``renderers.metrics``)

The chart is static SVG; ``build_hover_payload`` produces the JSON the page
script uses for the crosshair and value labels (see ``renderers.hover``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from netterwetter.renderers import render_template
from netterwetter.renderers.date_utils import (
    SECONDS_PER_DAY,
    clock_label,
    day_label,
    day_start,
    parse_timestamp,
)
from netterwetter.renderers.hover import HOVER_THRESHOLD_PX, decimals_for_unit
from netterwetter.renderers.metrics import (
    METRICS,
    Metric,
    MetricRange,
    compute_ranges,
    is_number,
)

GRID_HOURS = range(3, 22, 3)  # minor vertical lines between midnights
GRID_PERCENTS = [0, 25, 50, 75, 100]
DAYLIGHT_FALLBACK_HOURS = 12


@dataclass(frozen=True)
class ChartLayout:
    """Pixel dimensions of the chart (bottom padding holds two label rows)."""

    day_px: int = 400
    pad_left: int = 60
    pad_right: int = 20
    pad_top: int = 20
    pad_bottom: int = 55
    height: int = 600

    @property
    def plot_height(self) -> int:
        return self.height - self.pad_top - self.pad_bottom

    def plot_width(self, day_count: int) -> int:
        return day_count * self.day_px

    def width(self, day_count: int) -> int:
        return self.pad_left + self.plot_width(day_count) + self.pad_right


@dataclass
class SunEdge:
    """Sunrise or sunset marker: a soft gradient band with a time label."""

    kind: str
    x: float
    label: str


@dataclass
class DaylightFill:
    """Shaded span between a sunrise and the following sunset."""

    x: float
    width: float


@dataclass
class ChartData:
    """One location's series laid out for rendering."""

    location: str
    rows: list[dict[str, Any]]
    times: list[int]
    day_starts: list[int]
    layout: ChartLayout
    metrics: list[Metric]
    ranges: dict[str, MetricRange]
    series: dict[str, list[float | None]] = field(default_factory=dict)
    x_coords: list[float] = field(default_factory=list)

    @property
    def first_day_start(self) -> int:
        return self.day_starts[0]

    @property
    def day_count(self) -> int:
        return len(self.day_starts)

    def x_for(self, ts: int) -> float:
        """Horizontal position of a UTC timestamp."""
        day_index = (ts - self.first_day_start) // SECONDS_PER_DAY
        seconds_into_day = ts - (self.first_day_start + day_index * SECONDS_PER_DAY)
        return (
            self.layout.pad_left
            + day_index * self.layout.day_px
            + (seconds_into_day / SECONDS_PER_DAY) * self.layout.day_px
        )

    def y_for(self, key: str, value: float) -> float:
        """Vertical position of a metric value."""
        return self.ranges[key].y(value, self.layout.pad_top, self.layout.plot_height)

    def in_span(self, ts: int) -> bool:
        """Whether ``ts`` falls inside the plotted days."""
        return self.first_day_start <= ts < self.first_day_start + self.day_count * SECONDS_PER_DAY


def sort_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Records in ascending ``startTime`` order (string order of ISO-8601 UTC).

    Records without a string ``startTime`` are dropped. ``rows`` is not modified.
    """
    usable = [r for r in rows if isinstance(r, dict) and isinstance(r.get("startTime"), str)]
    return sorted(usable, key=lambda r: r["startTime"])


def pick_location(document: dict[str, Any] | None, location: str | None = None) -> str | None:
    """The requested location if the document has it, else its first one."""
    by_location = (document or {}).get("dataforlocations")
    if not isinstance(by_location, dict) or not by_location:
        return None
    if location is not None and location in by_location:
        return location
    return next(iter(by_location))


def build_chart_data(
    document: dict[str, Any] | None,
    location: str | None = None,
    layout: ChartLayout | None = None,
    metrics: list[Metric] = METRICS,
) -> ChartData | None:
    """Lay out one location of a merged series document.

    Returns None when the document has no location or no usable records.
    """
    chosen = pick_location(document, location)
    if chosen is None or document is None:
        return None
    raw_rows = document["dataforlocations"][chosen]
    if not isinstance(raw_rows, list):
        return None

    rows: list[dict[str, Any]] = []
    times: list[int] = []
    for row in sort_rows(raw_rows):
        ts = parse_timestamp(row["startTime"])
        if ts is not None:
            rows.append(row)
            times.append(ts)
    if not rows:
        return None

    # Every day between the first and last sample gets a column, even if empty
    first_day, last_day = day_start(times[0]), day_start(times[-1])
    chart = ChartData(
        location=chosen,
        rows=rows,
        times=times,
        day_starts=list(range(first_day, last_day + 1, SECONDS_PER_DAY)),
        layout=layout or ChartLayout(),
        metrics=metrics,
        ranges=compute_ranges(rows, metrics),
    )
    chart.x_coords = [chart.x_for(ts) for ts in times]
    chart.series = {
        m.key: [row[m.key] if is_number(row.get(m.key)) else None for row in rows]
        for m in metrics
    }
    return chart


def build_paths(chart: ChartData) -> list[dict[str, Any]]:
    """SVG path per metric; samples without a value are skipped."""
    paths = []
    for metric in chart.metrics:
        parts: list[str] = []
        for x, value in zip(chart.x_coords, chart.series[metric.key], strict=True):
            if value is None:
                continue
            command = "L" if parts else "M"
            parts.append(f"{command}{x:.1f} {chart.y_for(metric.key, value):.1f}")
        paths.append(
            {
                "key": metric.key,
                "d": " ".join(parts),
                "color": metric.color,
                "stroke_width": metric.stroke_width,
            }
        )
    return paths


def build_grid(chart: ChartData) -> dict[str, Any]:
    """Vertical day/3-hour lines with labels and horizontal percentage lines."""
    layout = chart.layout
    label_y = layout.pad_top + layout.plot_height + 18
    vertical: list[dict[str, Any]] = []
    labels: list[dict[str, Any]] = []
    day_labels: list[dict[str, Any]] = []

    for day_index, midnight in enumerate(chart.day_starts):
        day_x = layout.pad_left + day_index * layout.day_px
        vertical.append({"x": day_x, "cls": "grid-midnight"})
        labels.append({"x": day_x, "text": "00:00"})
        for hour in GRID_HOURS:
            x = day_x + (hour / 24) * layout.day_px
            vertical.append({"x": x, "cls": "grid-3h"})
            labels.append({"x": x, "text": f"{hour:02d}:00"})
            if hour == 12:
                day_labels.append({"x": x, "text": day_label(midnight + SECONDS_PER_DAY // 2)})

    horizontal = [
        {"y": layout.pad_top + (1 - pct / 100) * layout.plot_height} for pct in GRID_PERCENTS
    ]
    return {
        "vertical": vertical,
        "labels": labels,
        "day_labels": day_labels,
        "horizontal": horizontal,
        "label_y": label_y,
        "day_label_y": label_y + 18,
    }


def build_daylight(chart: ChartData) -> tuple[list[SunEdge], list[DaylightFill]]:
    """Sunrise/sunset markers and the daylight shading between them.

    A sunrise without a usable sunset in the same record still gets shaded,
    assuming ``DAYLIGHT_FALLBACK_HOURS`` of daylight.
    """
    half_hour_px = chart.layout.day_px / 48
    hour_px = chart.layout.day_px / 24
    edges: list[SunEdge] = []
    fills: list[DaylightFill] = []

    for row in chart.rows:
        sunrise = parse_timestamp(row.get("sunriseTime"))
        sunset = parse_timestamp(row.get("sunsetTime"))

        if sunrise is not None and chart.in_span(sunrise):
            edges.append(SunEdge("sunrise", chart.x_for(sunrise), clock_label(sunrise)))
            end = sunset
            if end is None or end <= sunrise:
                end = sunrise + DAYLIGHT_FALLBACK_HOURS * 3600
            width = hour_px * ((end - sunrise) / 3600 - 1)
            fills.append(DaylightFill(chart.x_for(sunrise) + half_hour_px, max(0.0, width)))

        if sunset is not None and chart.in_span(sunset):
            edges.append(SunEdge("sunset", chart.x_for(sunset), clock_label(sunset)))

    return edges, fills


def build_hover_payload(chart: ChartData) -> dict[str, Any]:
    """JSON payload for the hover script (and ``renderers.hover.hover_at``)."""
    return {
        "padTop": chart.layout.pad_top,
        "plotHeight": chart.layout.plot_height,
        "threshold": HOVER_THRESHOLD_PX,
        "xCoords": chart.x_coords,
        "times": chart.times,
        "data": chart.series,
        "ranges": {key: rng.to_dict() for key, rng in chart.ranges.items()},
        "units": {m.key: m.unit for m in chart.metrics},
        "decimals": {m.key: decimals_for_unit(m.unit) for m in chart.metrics},
    }


def build_chart_html(chart: ChartData | None) -> str:
    """Render the chart SVG, legend and hover script as an HTML fragment."""
    if chart is None:
        return render_template("no_data.html.j2", message="No data points in this file.")

    layout = chart.layout
    edges, fills = build_daylight(chart)
    grid = build_grid(chart)
    return render_template(
        "chart.html.j2",
        width=layout.width(chart.day_count),
        height=layout.height,
        pad_left=layout.pad_left,
        pad_top=layout.pad_top,
        plot_width=layout.plot_width(chart.day_count),
        plot_height=layout.plot_height,
        edge_width=layout.day_px / 24,
        edge_offset=layout.day_px / 48,
        sun_edges=edges,
        daylight=fills,
        grid=grid,
        paths=build_paths(chart),
        metrics=chart.metrics,
        payload=build_hover_payload(chart),
    )
