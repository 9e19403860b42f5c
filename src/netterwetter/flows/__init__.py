"""
Prefect flows for the data pipeline.

Flows:
- fetch: One fetch cycle (daily-if-due + hourly per location), merge, save
- build: Render the merged series files into static chart pages

Usage (local):
    python -m netterwetter.flows.fetch
    python -m netterwetter.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'fetch-cycle/default'

Usage (cron, hourly):
    0 * * * * netterwetter fetch
"""
