"""NetterWetter - hourly weather forecast collector and chart.

Architecture::

    datasources/   Upstream API (Tomorrow.io v4 timelines)
    merge.py       Fold overlapping responses into one deduplicated series
    store.py       Monthly JSON files + daily-request marker (load/save per run)
    renderers/     Pure data -> HTML (metric ranges, chart geometry, hover model)
    flows/         Prefect orchestration (fetch cycle, static site build)
    services/      Shared utilities (HTTP session with default timeout)
    server.py      Chart page over HTTP with a ``?file=`` selector

Data flow: datasources -> merge -> store (monthly files) -> renderers -> site/
"""

__version__ = "0.1.0"
__author__ = "Michael Beck"

from netterwetter.config import ConfigError, Settings

__all__ = ["ConfigError", "Settings", "__version__"]
