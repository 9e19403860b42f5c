"""
Shared HTTP client.

Provides a pre-configured ``requests.Session`` with a default timeout and a
User-Agent header.  Retries are switched off: a failed request is simply
missing from the current fetch cycle and the next scheduled run asks again.

Usage::

    from netterwetter.services.http import session

    resp = session.get("https://api.tomorrow.io/v4/timelines", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: One attempt per request, 4xx/5xx are left to ``resp.raise_for_status()``.
NO_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 20  # seconds

USER_AGENT = "netterwetter/0.1 (https://github.com/grayoctagon/NetterWetter)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry adapter mounted.

    The adapter carries ``NO_RETRY`` so urllib3 never retries behind the
    fetch cycle's back; pass ``retry`` to opt a session into retries.

    Args:
        retry: Custom retry strategy (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject the default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
