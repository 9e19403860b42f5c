"""Forecast timelines from the Tomorrow.io v4 API."""

from __future__ import annotations

from typing import Any

import requests

from netterwetter.datasources.tomorrow.client import (
    DAILY_FIELDS,
    DAILY_TIMESTEP,
    HOURLY_FIELDS,
    HOURLY_TIMESTEP,
    TIMELINES_URL,
    build_params,
)
from netterwetter.services.http import session


def fetch_timelines(
    location: str,
    fields: list[str],
    timestep: str,
    api_key: str,
    *,
    timeout: float | None = None,
) -> dict[str, Any] | None:
    """
    Fetch one forecast timeline for a location (now .. now + 5 days).

    Args:
        location: ``"lat,lon"`` string, passed through untouched.
        fields: Metric names to request.
        timestep: ``"1d"`` or ``"1h"``.
        api_key: Tomorrow.io API key.
        timeout: Per-request timeout; the session default applies when None.

    Returns:
        The decoded JSON object, or None when the request failed (transport
        error, timeout, HTTP status >= 400, or a body that is not a JSON
        object). Failures are not retried.
    """
    params = build_params(location, fields, timestep, api_key)
    kwargs: dict[str, Any] = {"params": params}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        resp = session.get(TIMELINES_URL, **kwargs)
        resp.raise_for_status()
        result = resp.json()
    except (requests.RequestException, ValueError):
        return None

    return result if isinstance(result, dict) else None


def fetch_daily(location: str, api_key: str, **kwargs: Any) -> dict[str, Any] | None:
    """Sunrise/sunset times, one interval per day."""
    return fetch_timelines(location, DAILY_FIELDS, DAILY_TIMESTEP, api_key, **kwargs)


def fetch_hourly(location: str, api_key: str, **kwargs: Any) -> dict[str, Any] | None:
    """Hourly weather metrics."""
    return fetch_timelines(location, HOURLY_FIELDS, HOURLY_TIMESTEP, api_key, **kwargs)
