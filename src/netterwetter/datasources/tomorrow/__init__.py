"""Tomorrow.io weather data source.

Fetches daily (sunrise/sunset) and hourly forecast timelines. Needs an API key.

Public API:
  - timelines: fetch_timelines, fetch_daily, fetch_hourly
  - client: API URL, requested fields, build_params
"""

from netterwetter.datasources.tomorrow.client import (
    DAILY_FIELDS,
    DAILY_TIMESTEP,
    HOURLY_FIELDS,
    HOURLY_TIMESTEP,
    TIMELINES_URL,
    build_params,
)
from netterwetter.datasources.tomorrow.timelines import (
    fetch_daily,
    fetch_hourly,
    fetch_timelines,
)

__all__ = [
    "DAILY_FIELDS",
    "DAILY_TIMESTEP",
    "HOURLY_FIELDS",
    "HOURLY_TIMESTEP",
    "TIMELINES_URL",
    "build_params",
    "fetch_daily",
    "fetch_hourly",
    "fetch_timelines",
]
