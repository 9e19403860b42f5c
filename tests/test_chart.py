"""Tests for the chart renderer."""

from __future__ import annotations

from typing import Any

import pytest

from netterwetter.renderers.chart import (
    ChartLayout,
    build_chart_data,
    build_chart_html,
    build_daylight,
    build_grid,
    build_hover_payload,
    build_paths,
    pick_location,
    sort_rows,
)
from netterwetter.renderers.date_utils import clock_label, day_label, day_start, parse_timestamp

LOCATION = "48.25,16.40"


def document(rows: list[dict[str, Any]], location: str = LOCATION) -> dict[str, Any]:
    return {"dataforlocations": {location: rows}}


class TestDateUtils:
    """UTC timestamp helpers."""

    def test_parse_z_suffix(self) -> None:
        assert parse_timestamp("2025-07-04T00:00:00Z") == 1751587200

    def test_parse_naive_is_utc(self) -> None:
        assert parse_timestamp("2025-07-04T00:00:00") == 1751587200

    def test_parse_offset(self) -> None:
        assert parse_timestamp("2025-07-04T02:00:00+02:00") == 1751587200

    @pytest.mark.parametrize("value", [None, 123, "", "yesterday"])
    def test_parse_invalid(self, value: object) -> None:
        assert parse_timestamp(value) is None

    def test_day_start(self) -> None:
        assert day_start(1751587200 + 3600 * 13 + 5) == 1751587200

    def test_labels(self) -> None:
        ts = 1751587200 + 6 * 3600 + 42 * 60
        assert clock_label(ts) == "06:42"
        assert day_label(ts) == "Friday 4.7.2025"


class TestSortRows:
    """Chronological order independent of insertion order."""

    def test_sorted(self) -> None:
        rows = [{"startTime": "T3"}, {"startTime": "T1"}, {"startTime": "T2"}]
        assert [r["startTime"] for r in sort_rows(rows)] == ["T1", "T2", "T3"]
        assert [r["startTime"] for r in rows] == ["T3", "T1", "T2"]

    def test_drops_rows_without_start_time(self) -> None:
        rows = [{"startTime": "T1"}, {"temperature": 1}, {"startTime": None}, "junk"]
        assert sort_rows(rows) == [{"startTime": "T1"}]  # type: ignore[arg-type]


class TestPickLocation:
    """Location selection."""

    def test_first_by_default(self) -> None:
        doc = {"dataforlocations": {"a": [], "b": []}}
        assert pick_location(doc) == "a"

    def test_requested(self) -> None:
        doc = {"dataforlocations": {"a": [], "b": []}}
        assert pick_location(doc, "b") == "b"

    def test_unknown_falls_back(self) -> None:
        doc = {"dataforlocations": {"a": [], "b": []}}
        assert pick_location(doc, "zzz") == "a"

    @pytest.mark.parametrize(
        "doc",
        [None, {}, {"dataforlocations": {}}, {"dataforlocations": []}],
    )
    def test_nothing_to_pick(self, doc: dict[str, Any] | None) -> None:
        assert pick_location(doc) is None


class TestBuildChartData:
    """Layout of samples."""

    def test_empty_document(self) -> None:
        assert build_chart_data(None) is None
        assert build_chart_data({"dataforlocations": {}}) is None
        assert build_chart_data(document([])) is None

    def test_rows_without_valid_time(self) -> None:
        assert build_chart_data(document([{"startTime": "soon", "temperature": 1}])) is None

    def test_x_mapping(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {"startTime": "2025-07-05T06:00:00Z", "temperature": 18.0},
                    {"startTime": "2025-07-04T00:00:00Z", "temperature": 10.0},
                    {"startTime": "2025-07-04T12:00:00Z", "temperature": 20.0},
                ]
            )
        )
        assert chart is not None
        assert chart.location == LOCATION
        assert chart.day_count == 2
        assert chart.x_coords == [60, 260, 560]
        assert chart.series["temperature"] == [10.0, 20.0, 18.0]
        assert chart.series["humidity"] == [None, None, None]

    def test_gap_days_get_columns(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {"startTime": "2025-07-01T10:00:00Z", "temperature": 1.0},
                    {"startTime": "2025-07-04T10:00:00Z", "temperature": 2.0},
                ]
            )
        )
        assert chart is not None
        assert chart.day_count == 4
        assert chart.x_coords[1] == pytest.approx(60 + 3 * 400 + 400 * 10 / 24)

    def test_non_numeric_values_are_gaps(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {"startTime": "2025-07-04T00:00:00Z", "temperature": "warm"},
                    {"startTime": "2025-07-04T01:00:00Z", "temperature": 11.0},
                ]
            )
        )
        assert chart is not None
        assert chart.series["temperature"] == [None, 11.0]

    def test_custom_layout(self) -> None:
        layout = ChartLayout(day_px=240)
        chart = build_chart_data(
            document([{"startTime": "2025-07-04T12:00:00Z", "temperature": 1.0}]), layout=layout
        )
        assert chart is not None
        assert chart.x_coords == [60 + 120]
        assert layout.width(chart.day_count) == 60 + 240 + 20


class TestPaths:
    """SVG path strings."""

    def test_path_skips_missing(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {"startTime": "2025-07-04T00:00:00Z", "temperature": 10.0},
                    {"startTime": "2025-07-04T06:00:00Z"},
                    {"startTime": "2025-07-04T12:00:00Z", "temperature": 20.0},
                ]
            )
        )
        assert chart is not None
        paths = {p["key"]: p for p in build_paths(chart)}
        assert paths["temperature"]["d"] == "M60.0 545.0 L260.0 20.0"
        assert paths["temperature"]["color"] == "#FF9800"
        assert paths["humidity"]["d"] == ""


class TestGrid:
    """Day and 3-hour grid."""

    def test_one_day(self) -> None:
        chart = build_chart_data(
            document([{"startTime": "2025-07-04T10:00:00Z", "temperature": 1.0}])
        )
        assert chart is not None
        grid = build_grid(chart)
        assert [label["text"] for label in grid["labels"]] == [
            "00:00", "03:00", "06:00", "09:00", "12:00", "15:00", "18:00", "21:00",
        ]  # fmt: skip
        assert grid["day_labels"] == [{"x": 260, "text": "Friday 4.7.2025"}]
        assert [line["cls"] for line in grid["vertical"]].count("grid-midnight") == 1
        assert [line["y"] for line in grid["horizontal"]] == [545, 413.75, 282.5, 151.25, 20]


class TestDaylight:
    """Sunrise/sunset markers and shading."""

    def test_sunrise_and_sunset(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {
                        "startTime": "2025-07-04T00:00:00Z",
                        "sunriseTime": "2025-07-04T04:00:00Z",
                        "sunsetTime": "2025-07-04T20:00:00Z",
                    }
                ]
            )
        )
        assert chart is not None
        edges, fills = build_daylight(chart)
        assert [(e.kind, e.label) for e in edges] == [("sunrise", "04:00"), ("sunset", "20:00")]
        assert edges[0].x == pytest.approx(60 + 400 * 4 / 24)
        assert len(fills) == 1
        assert fills[0].x == pytest.approx(60 + 400 * 4 / 24 + 400 / 48)
        assert fills[0].width == pytest.approx(400 / 24 * 15)

    def test_missing_sunset_uses_fallback(self) -> None:
        chart = build_chart_data(
            document(
                [{"startTime": "2025-07-04T00:00:00Z", "sunriseTime": "2025-07-04T05:00:00Z"}]
            )
        )
        assert chart is not None
        edges, fills = build_daylight(chart)
        assert [e.kind for e in edges] == ["sunrise"]
        assert fills[0].width == pytest.approx(400 / 24 * 11)

    def test_markers_outside_span_skipped(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {
                        "startTime": "2025-07-04T00:00:00Z",
                        "sunriseTime": "2025-07-09T04:00:00Z",
                        "sunsetTime": "2025-07-09T20:00:00Z",
                    }
                ]
            )
        )
        assert chart is not None
        assert build_daylight(chart) == ([], [])


class TestHoverPayload:
    """Data handed to the page script."""

    def test_payload(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {"startTime": "2025-07-04T00:00:00Z", "temperature": 10.0, "humidity": 55},
                    {"startTime": "2025-07-04T12:00:00Z", "temperature": 20.0},
                ]
            )
        )
        assert chart is not None
        payload = build_hover_payload(chart)
        assert payload["padTop"] == 20
        assert payload["plotHeight"] == 525
        assert payload["threshold"] == 30
        assert payload["xCoords"] == [60, 260]
        assert payload["data"]["humidity"] == [55, None]
        assert payload["ranges"]["temperature"] == {"min": 10.0, "max": 20.0}
        assert payload["units"]["humidity"] == "%"
        assert payload["decimals"] == {
            "windGust": 1,
            "windSpeed": 1,
            "humidity": 0,
            "precipitationIntensity": 1,
            "temperatureApparent": 1,
            "temperature": 1,
        }


class TestChartHtml:
    """Rendered fragment."""

    def test_no_data(self) -> None:
        html = build_chart_html(None)
        assert "No data points in this file." in html
        assert "<svg" not in html

    def test_chart(self) -> None:
        chart = build_chart_data(
            document(
                [
                    {
                        "startTime": "2025-07-04T00:00:00Z",
                        "temperature": 10.0,
                        "sunriseTime": "2025-07-04T04:00:00Z",
                        "sunsetTime": "2025-07-04T20:00:00Z",
                    },
                    {"startTime": "2025-07-04T12:00:00Z", "temperature": 20.0},
                ]
            )
        )
        html = build_chart_html(chart)
        assert 'id="chart"' in html
        assert 'width="480"' in html
        assert 'name="temperature"' in html
        assert 'id="dot_humidity"' in html
        assert 'class="daylight"' in html
        assert "Friday 4.7.2025" in html
        assert "Temperature (°C)" in html
        assert '"xCoords": [60' in html
