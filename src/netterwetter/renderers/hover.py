"""Hover behaviour of the weather chart.

The browser runs this logic in ``templates/chart_script.html.j2`` on every
mouse move, against the JSON payload built by
``renderers.chart.build_hover_payload``. This module is the same computation
in Python: it decides the per-metric label precision baked into the payload
and documents (and tests) what the script does.

Contract, per pointer position ``(x, y)`` in SVG coordinates:
  - outside the plot's vertical bounds -> hide everything
  - nearest sample farther than ``HOVER_THRESHOLD_PX`` -> hide everything
  - otherwise crosshair at the sample's x and the pointer's y, and per metric
    a dot + label, or nothing when the value at that sample is null
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from netterwetter.renderers.metrics import MetricRange

HOVER_THRESHOLD_PX = 30
LABEL_OFFSET_PX = 5


def decimals_for_unit(unit: str) -> int:
    """Percentages are shown as whole numbers, everything else with one decimal."""
    return 0 if unit == "%" else 1


def format_value(value: float, unit: str, decimals: int | None = None) -> str:
    """Label text, e.g. ``5.0°C`` or ``80%``."""
    if decimals is None:
        decimals = decimals_for_unit(unit)
    return f"{value:.{decimals}f}{unit}"


def nearest_index(x_coords: list[float], x: float) -> int | None:
    """Index of the sample closest to ``x`` (``x_coords`` ascending).

    Linear scan that stops once samples lie right of ``x`` and move away.
    """
    best_idx: int | None = None
    best = math.inf
    for i, xc in enumerate(x_coords):
        d = abs(xc - x)
        if d < best:
            best, best_idx = d, i
        elif xc > x and d > best:
            break
    return best_idx


@dataclass
class HoverPoint:
    """Dot and label for one metric at the hovered sample."""

    key: str
    cx: float
    cy: float
    label_x: float
    label_y: float
    text: str


@dataclass
class HoverState:
    """Everything visible while hovering one sample."""

    index: int
    x: float
    y: float
    time: int
    points: dict[str, HoverPoint | None] = field(default_factory=dict)


def hover_at(payload: dict[str, Any], x: float, y: float) -> HoverState | None:
    """Compute the hover overlay for a pointer position; None hides it."""
    top = payload["padTop"]
    plot_height = payload["plotHeight"]
    if y < top or y > top + plot_height:
        return None

    x_coords: list[float] = payload["xCoords"]
    idx = nearest_index(x_coords, x)
    if idx is None:
        return None
    sample_x = x_coords[idx]
    if abs(sample_x - x) > payload.get("threshold", HOVER_THRESHOLD_PX):
        return None

    state = HoverState(index=idx, x=sample_x, y=y, time=payload["times"][idx])
    for key, values in payload["data"].items():
        value = values[idx]
        if value is None:
            state.points[key] = None
            continue
        rng = payload["ranges"][key]
        cy = MetricRange(rng["min"], rng["max"]).y(value, top, plot_height)
        unit = payload["units"].get(key, "")
        state.points[key] = HoverPoint(
            key=key,
            cx=sample_x,
            cy=cy,
            label_x=sample_x + LABEL_OFFSET_PX,
            label_y=cy - LABEL_OFFSET_PX,
            text=format_value(value, unit, payload["decimals"].get(key)),
        )
    return state
