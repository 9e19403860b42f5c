"""Full chart page: file selector, heading and chart."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from netterwetter.renderers import render_template
from netterwetter.renderers.chart import build_chart_data, build_chart_html


def build_page_html(
    files: list[str],
    selected: str | None,
    document: dict[str, Any] | None,
    href_for: Callable[[str], str],
    location: str | None = None,
) -> str:
    """Render the page for one merged series file.

    Args:
        files: All discovered merged series files, newest first.
        selected: The file being shown (None when there are no files).
        document: The loaded contents of ``selected``.
        href_for: Link target for a file in the selector.
        location: Location to chart; defaults to the file's first location.
    """
    if selected is None:
        return render_template(
            "base.html.j2",
            title="NetterWetter",
            heading="No weather data files found.",
            files=[],
            chart_html="",
        )

    chart = build_chart_data(document, location)
    if chart is not None:
        heading = f"Weather graph for {chart.location} ({len(chart.rows)} points)"
    else:
        heading = f"No weather data in {selected}"

    links = [{"href": href_for(f), "label": f, "active": f == selected} for f in files]
    return render_template(
        "base.html.j2",
        title=f"NetterWetter - {selected}",
        heading=heading,
        files=links,
        chart_html=build_chart_html(chart),
    )
