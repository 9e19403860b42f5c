"""
Chart page over HTTP.

``GET /?file=2025/weather2025_03_minimized.json&location=48.25,16.40`` renders
the chart for that file on every request. An unknown or missing ``file`` falls
back to the newest file; an unknown or missing ``location`` to the file's first
location.
"""

from __future__ import annotations

import http.server
from pathlib import Path
from urllib.parse import parse_qs, urlencode, urlsplit

from netterwetter.renderers.page import build_page_html
from netterwetter.store import WeatherStore


def file_href(name: str) -> str:
    """Selector link for a merged series file."""
    return "?" + urlencode({"file": name})


def render_chart_page(
    store: WeatherStore,
    requested: str | None = None,
    location: str | None = None,
) -> str:
    """Render the page for the requested (or newest) merged series file."""
    files = store.list_minimized_files()
    selected = store.select_minimized_file(requested)
    document = store.read_document(selected) if selected else None
    return build_page_html(files, selected, document, href_for=file_href, location=location)


class ChartRequestHandler(http.server.BaseHTTPRequestHandler):
    """Serves the chart page; everything else is a 404."""

    store: WeatherStore = WeatherStore(Path("data"))

    def do_GET(self) -> None:  # noqa: N802
        url = urlsplit(self.path)
        if url.path not in ("/", "/index.html"):
            self.send_error(404, "Not found")
            return

        query = parse_qs(url.query)
        requested = query.get("file", [None])[0]
        location = query.get("location", [None])[0]

        body = render_chart_page(self.store, requested, location).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


def make_handler(store: WeatherStore) -> type[ChartRequestHandler]:
    """Handler class bound to a specific data directory."""
    return type("BoundChartRequestHandler", (ChartRequestHandler,), {"store": store})
