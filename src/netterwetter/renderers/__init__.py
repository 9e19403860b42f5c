"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: dict or dataclass (a merged series document or its ChartData)
  - Output: str (HTML fragment or page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py (static site) and server.py (chart over HTTP).

Public API:
  - metrics: Metric, MetricRange, METRICS, compute_ranges
  - chart: ChartData, build_chart_data, build_chart_html, build_hover_payload
  - hover: hover_at, nearest_index, format_value (mirrors the page script)
  - page: build_page_html
  - date_utils: parse_timestamp, day_label, clock_label

Templates live in ``templates/`` (Jinja2, ``.html.j2``). The full page is
``base.html.j2``; fragments have no <html>/<body> tags.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
