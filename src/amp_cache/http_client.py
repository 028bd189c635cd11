from contextlib import contextmanager
from typing import Iterator

import httpx
from django.conf import settings

DEFAULT_USER_AGENT = "amp-cache-purger/1.0"


def build_http_client(**kwargs) -> httpx.Client:
    timeout = float(getattr(settings, "AMP_HTTP_TIMEOUT", 10))
    headers = {
        "User-Agent": getattr(settings, "AMP_HTTP_USER_AGENT", "") or DEFAULT_USER_AGENT,
        # responses are only inspected for their status
        "Accept-Encoding": "identity",
    }
    limits = httpx.Limits(max_keepalive_connections=10, keepalive_expiry=30.0)
    return httpx.Client(timeout=timeout, headers=headers, limits=limits, **kwargs)


@contextmanager
def client_scope(client: httpx.Client | None = None) -> Iterator[httpx.Client]:
    """Yield `client` as is, or a fresh one that is closed on exit."""
    if client is not None:
        yield client
        return
    owned = build_http_client()
    try:
        yield owned
    finally:
        owned.close()
