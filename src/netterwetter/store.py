"""Persisted state for the fetch job and the chart.

Layout under the base directory (one pair of files per UTC calendar month)::

    last_daily_check.txt                 date of the last daily (sunrise/sunset) batch
    2025/weather2025_03_input.json       raw response log  {"responses": [...]}
    2025/weather2025_03_minimized.json   merged series     {"dataforlocations": {...}}

The fetch flow loads everything at the start of a run and saves once at the
end. Nothing is cached between processes. Writes go to a temporary file that
replaces the target, so an interrupted run leaves the previous files intact.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import date, datetime
from pathlib import Path  # noqa: TC003
from typing import Any

MARKER_FILE = "last_daily_check.txt"
MINIMIZED_GLOB = "20*/weather*_minimized.json"


class WeatherStore:
    """Reads and writes the monthly JSON files and the daily-request marker."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.marker = base_dir / MARKER_FILE

    # -- paths ---------------------------------------------------------------

    def input_path(self, now: datetime) -> Path:
        """Raw response log for the month of ``now``."""
        return self.base / f"{now:%Y}" / f"weather{now:%Y}_{now:%m}_input.json"

    def minimized_path(self, now: datetime) -> Path:
        """Merged series for the month of ``now``."""
        return self.base / f"{now:%Y}" / f"weather{now:%Y}_{now:%m}_minimized.json"

    # -- fetch side ----------------------------------------------------------

    def load_input(self, now: datetime) -> dict[str, Any]:
        """Load this month's raw response log, or start an empty one."""
        doc = self._read_json(self.input_path(now))
        if doc is None or not isinstance(doc.get("responses"), list):
            return {"responses": []}
        return doc

    def load_minimized(self, now: datetime) -> dict[str, Any]:
        """Load this month's merged series, or start an empty one."""
        doc = self._read_json(self.minimized_path(now))
        if doc is None:
            return {"dataforlocations": {}}
        # An empty mapping may have been written as a JSON list
        if not isinstance(doc.get("dataforlocations"), dict):
            doc["dataforlocations"] = {}
        return doc

    def save_cycle(
        self,
        now: datetime,
        input_data: dict[str, Any],
        minimized: dict[str, Any],
    ) -> tuple[Path, Path]:
        """Write the raw log and the merged series for the month of ``now``.

        Returns:
            ``(input_path, minimized_path)``.
        """
        input_path = self.write_json(self.input_path(now), input_data)
        minimized_path = self.write_json(self.minimized_path(now), minimized)
        return input_path, minimized_path

    def read_daily_marker(self) -> date | None:
        """Day of the last daily batch, or None if absent or unreadable."""
        if not self.marker.exists():
            return None
        try:
            return date.fromisoformat(self.marker.read_text(encoding="utf-8").strip())
        except ValueError:
            return None

    def write_daily_marker(self, day: date) -> Path:
        """Record ``day`` as the last day the daily batch was issued."""
        return self._write_text(self.marker, day.isoformat())

    # -- chart side ----------------------------------------------------------

    def list_minimized_files(self) -> list[str]:
        """Relative names of all merged series files, newest first."""
        if not self.base.is_dir():
            return []
        names = [p.relative_to(self.base).as_posix() for p in self.base.glob(MINIMIZED_GLOB)]
        # Fixed-width year/month in the name, so name order is date order
        return sorted(names, reverse=True)

    def select_minimized_file(self, requested: str | None = None) -> str | None:
        """Pick the requested file if it exists in the store, else the newest."""
        files = self.list_minimized_files()
        if requested is not None and requested in files:
            return requested
        return files[0] if files else None

    def read_document(self, name: str) -> dict[str, Any] | None:
        """Load a stored JSON document by its relative name."""
        return self._read_json(self._resolve(name))

    # -- helpers -------------------------------------------------------------

    def write_json(self, path: Path, data: Any) -> Path:
        """Atomically write ``data`` as pretty-printed JSON."""
        return self._write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")

    def _write_text(self, path: Path, text: str) -> Path:
        full = self._check(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=full.parent, prefix=f".{full.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, full)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        return full

    def _read_json(self, path: Path) -> dict[str, Any] | None:
        full = self._check(path)
        if not full.exists():
            return None
        with full.open(encoding="utf-8") as f:
            try:
                doc = json.load(f)
            except ValueError:
                return None
        return doc if isinstance(doc, dict) else None

    def _resolve(self, name: str) -> Path:
        return self._check(self.base / name)

    def _check(self, full: Path) -> Path:
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {full}"
            raise ValueError(msg) from None
        return full
