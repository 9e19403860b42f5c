"""
Prefect flow for one fetch cycle against the Tomorrow.io API.

Per configured location, in order:
  1. daily request (sunrise/sunset), only on the first run of a UTC day
  2. hourly request (eight weather metrics)
with a blocking pause after every request. Each successful response is
appended to the month's raw log and merged into the minimized series; both
files are written once, after the last location.

Schedule it hourly, e.g. via cron::

    0 * * * * netterwetter fetch

Run with Prefect dashboard:
    prefect server start &
    python -m netterwetter.flows.fetch
"""

from __future__ import annotations

import time
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from netterwetter.config import ConfigError, get_settings, require_fetch_settings
from netterwetter.datasources import tomorrow
from netterwetter.merge import merge_api_data
from netterwetter.schemas import RawResponseEntry
from netterwetter.store import WeatherStore

REQUEST_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def is_daily_due(marker: date | None, today: date) -> bool:
    """The daily batch runs once per UTC calendar day."""
    return marker is None or marker != today


@task(name="request-daily", cache_policy=NO_CACHE)
def request_daily(
    location: str, api_key: str, timeout: float | None = None
) -> dict[str, Any] | None:
    """Fetch sunrise/sunset for the next five days."""
    return tomorrow.fetch_daily(location, api_key, timeout=timeout)


@task(name="request-hourly", cache_policy=NO_CACHE)
def request_hourly(
    location: str, api_key: str, timeout: float | None = None
) -> dict[str, Any] | None:
    """Fetch hourly weather for the next five days."""
    return tomorrow.fetch_hourly(location, api_key, timeout=timeout)


@task(name="save-cycle", cache_policy=NO_CACHE)
def save_cycle(
    data_dir: str,
    now: datetime,
    input_data: dict[str, Any],
    minimized: dict[str, Any],
) -> tuple[Path, Path]:
    """Write this month's raw log and merged series."""
    return WeatherStore(Path(data_dir)).save_cycle(now, input_data, minimized)


def record_response(
    input_data: dict[str, Any],
    minimized: dict[str, Any],
    location: str,
    fields: list[str],
    response: dict[str, Any],
    request_time: str,
) -> int:
    """Append a response to the raw log and merge it into the series.

    Returns:
        Number of new timestamps added for ``location``.
    """
    entry = RawResponseEntry(
        request_time=request_time,
        queried_attributes=",".join(fields),
        received_data=response,
    )
    input_data.setdefault("responses", []).append(entry.to_json())
    return merge_api_data(minimized, location, response)


@flow(name="fetch-cycle", log_prints=True)
def fetch_all(
    api_key: str,
    locations: list[str],
    sleep_seconds: float = 5,
    data_dir: str = "data",
    now: datetime | None = None,
    timeout: float | None = None,
) -> dict[str, Any]:
    """
    Run one fetch cycle for all locations.

    A failed request only loses that request's data; the other granularity
    and the other locations still run. Nothing is written until every
    location has been processed.

    Raises:
        ConfigError: No API key or no locations (before any request).
    """
    if not api_key or not locations:
        msg = "API key or locations are not configured"
        raise ConfigError(msg)

    now = now or datetime.now(UTC)
    today = now.date()
    request_time = now.strftime(REQUEST_TIME_FORMAT)

    store = WeatherStore(Path(data_dir))
    do_daily = is_daily_due(store.read_daily_marker(), today)
    input_data = store.load_input(now)
    minimized = store.load_minimized(now)

    results: dict[str, Any] = {"daily": do_daily, "requests": 0, "failed": 0, "new_records": 0}

    def handle(location: str, fields: list[str], response: dict[str, Any] | None) -> None:
        results["requests"] += 1
        if response is None:
            results["failed"] += 1
            print(f"No data for {location} ({','.join(fields)}), skipping.")
            return
        results["new_records"] += record_response(
            input_data, minimized, location, fields, response, request_time
        )

    for location in locations:
        if do_daily:
            print(f"Fetching daily data for {location}...")
            handle(location, tomorrow.DAILY_FIELDS, request_daily(location, api_key, timeout))
            time.sleep(sleep_seconds)

        print(f"Fetching hourly data for {location}...")
        handle(location, tomorrow.HOURLY_FIELDS, request_hourly(location, api_key, timeout))
        time.sleep(sleep_seconds)

    input_path, minimized_path = save_cycle(data_dir, now, input_data, minimized)
    if do_daily:
        store.write_daily_marker(today)

    results["succeeded"] = results["requests"] - results["failed"]
    results["input_path"] = str(input_path)
    results["minimized_path"] = str(minimized_path)
    print(
        f"Saved {results['succeeded']}/{results['requests']} responses "
        f"({results['new_records']} new records) to {minimized_path}"
    )
    return results


if __name__ == "__main__":
    settings = get_settings()
    require_fetch_settings(settings)
    result = fetch_all(
        api_key=settings.api_key,
        locations=settings.locations,
        sleep_seconds=settings.sleep_seconds,
        data_dir=str(settings.data_dir),
        timeout=settings.request_timeout,
    )
    print(f"Flow complete: {result}")
