"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request parameters
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Fetch functions go through ``netterwetter.services.http.session`` and return
the decoded JSON object, or None when the request failed.
"""
