"""Default transport clients bound by the transport-client layer.

Both factories build ``httpx`` clients; no connection is opened until a
request is sent, so binding them during finalization performs no I/O.
"""

from __future__ import annotations

import httpx

DEFAULT_TIMEOUT = httpx.Timeout(connect=2.0, read=30.0, write=30.0, pool=5.0)


def default_http_client() -> httpx.Client:
    """Return a blocking client for configurations that did not supply one."""

    return httpx.Client(timeout=DEFAULT_TIMEOUT)


def default_async_http_client() -> httpx.AsyncClient:
    """Return a non-blocking client for configurations that did not supply one."""

    return httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
