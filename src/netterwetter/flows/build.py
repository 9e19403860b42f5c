"""
Prefect flow for building the static chart site from the merged series files.

Writes one page per monthly file plus ``index.html`` showing the newest one.
The file selector on each page links to the other static pages; for the
``?file=`` query interface use ``netterwetter serve``.

Run locally:
    python -m netterwetter.flows.build
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from netterwetter.config import get_settings
from netterwetter.renderers.page import build_page_html
from netterwetter.store import WeatherStore


def page_name(file_name: str) -> str:
    """Static page for a merged series file, e.g. ``2025_weather2025_03_minimized.html``."""
    return file_name.removesuffix(".json").replace("/", "_") + ".html"


@task(name="discover-files")
def discover_files(data_dir: str) -> list[str]:
    """List merged series files, newest first."""
    return WeatherStore(Path(data_dir)).list_minimized_files()


@task(name="render-page")
def render_page(data_dir: str, files: list[str], selected: str | None) -> str:
    """Render the chart page for one file (or the "no data" page)."""
    document = WeatherStore(Path(data_dir)).read_document(selected) if selected else None
    return build_page_html(files, selected, document, href_for=page_name)


@task(name="write-page")
def write_page(site_dir: str, name: str, html: str) -> Path:
    """Write one HTML page to the site directory."""
    output_dir = Path(site_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / name
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_all(data_dir: str = "data", site_dir: str | None = None) -> dict[str, Any]:
    """
    Build the static site from all merged series files.

    This is the Prefect flow behind ``netterwetter build``.
    """
    site = site_dir or str(Path(data_dir) / "site")

    print("Discovering merged series files...")
    files = discover_files(data_dir)
    if not files:
        print("No weather data files found. Run the fetch flow first.")
        index = write_page(site, "index.html", render_page(data_dir, [], None))
        return {"pages": 1, "output": str(index), "files": 0}

    for name in files:
        print(f"Rendering {name}...")
        write_page(site, page_name(name), render_page(data_dir, files, name))

    index = write_page(site, "index.html", render_page(data_dir, files, files[0]))
    print(f"Site built: {index}")
    return {"pages": len(files) + 1, "output": str(index), "files": len(files)}


if __name__ == "__main__":
    settings = get_settings()
    result = build_all(data_dir=str(settings.data_dir), site_dir=str(settings.site_dir))
    print(f"Flow complete: {result}")
