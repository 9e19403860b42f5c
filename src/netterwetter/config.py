"""Application settings.

Values come from (highest priority first):

1. ``data/settings.json`` (or the file passed to :func:`load_settings`)::

       {
         "apiKey": "abcdabcdabcdabcdabcdabcdabcdabcd",
         "locations": ["48.2556667,16.3995556"],
         "sleepSeconds": 2
       }

2. Environment variables prefixed with ``NETTERWETTER_`` (``.env`` is read too),
   e.g. ``NETTERWETTER_API_KEY`` or ``NETTERWETTER_LOCATIONS='["48.2,16.4"]'``.

3. Field defaults below.

API keys are managed at https://app.tomorrow.io/development/keys
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SETTINGS_FILE = Path("data/settings.json")

# settings.json key -> Settings field
_FILE_KEYS = {
    "apiKey": "api_key",
    "locations": "locations",
    "sleepSeconds": "sleep_seconds",
}


class ConfigError(Exception):
    """Settings are missing, unreadable or incomplete."""


class Settings(BaseSettings):
    """Runtime configuration for the fetch job, site build and chart server."""

    model_config = SettingsConfigDict(
        env_prefix="NETTERWETTER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "NetterWetter"
    app_env: str = "development"
    debug: bool = False

    api_key: str = ""
    locations: list[str] = Field(default_factory=list)
    sleep_seconds: float = Field(default=5, ge=0)
    request_timeout: float = Field(default=20, gt=0)

    data_dir: Path = Path("data")
    site_dir: Path = Path("data/site")
    api_port: int = 8000


def load_settings(path: Path | None = None) -> Settings:
    """Build settings from the JSON settings file and the environment.

    A missing default settings file is fine (the environment may carry
    everything); a missing explicit ``path`` is not.

    Raises:
        ConfigError: The file can't be read or parsed, or a value is invalid.
    """
    settings_file = path or DEFAULT_SETTINGS_FILE
    overrides: dict[str, Any] = {}

    if settings_file.exists():
        try:
            raw = json.loads(settings_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            msg = f"Could not parse {settings_file}: {e}"
            raise ConfigError(msg) from e
        if not isinstance(raw, dict):
            msg = f"Could not parse {settings_file}: expected a JSON object"
            raise ConfigError(msg)
        overrides = {
            field: raw[key] for key, field in _FILE_KEYS.items() if raw.get(key) is not None
        }
    elif path is not None:
        msg = f"Missing settings file: {settings_file}"
        raise ConfigError(msg)

    try:
        return Settings(**overrides)
    except ValidationError as e:
        msg = f"Invalid settings in {settings_file}: {e}"
        raise ConfigError(msg) from e


def require_fetch_settings(settings: Settings) -> None:
    """Fail unless the settings are complete enough to call the API."""
    if not settings.api_key or not settings.locations:
        msg = "API key or locations are not configured (see data/settings.json)"
        raise ConfigError(msg)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, loaded once."""
    return load_settings()
