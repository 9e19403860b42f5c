"""Tomorrow.io API client constants and request parameters.

API docs: https://docs.tomorrow.io/reference/post-timelines
"""

from __future__ import annotations

TIMELINES_URL = "https://api.tomorrow.io/v4/timelines"

# Requested once per UTC day
DAILY_FIELDS = ["sunriseTime", "sunsetTime"]
DAILY_TIMESTEP = "1d"

# Requested on every run
HOURLY_FIELDS = [
    "temperature",
    "temperatureApparent",
    "humidity",
    "windGust",
    "windSpeed",
    "uvIndex",
    "rainIntensity",
    "precipitationIntensity",
]
HOURLY_TIMESTEP = "1h"

UNITS = "metric"
START_TIME = "now"
END_TIME = "nowPlus5d"


def build_params(location: str, fields: list[str], timestep: str, api_key: str) -> dict[str, str]:
    """Query parameters for one timelines request."""
    return {
        "location": location,
        "fields": ",".join(fields),
        "timesteps": timestep,
        "units": UNITS,
        "startTime": START_TIME,
        "endTime": END_TIME,
        "apikey": api_key,
    }
