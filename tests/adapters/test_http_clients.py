from __future__ import annotations

import httpx

from lib_client_config.adapters.http.default import DEFAULT_TIMEOUT, default_async_http_client, default_http_client


def test_default_clients_use_shared_timeout() -> None:
    client = default_http_client()
    try:
        assert isinstance(client, httpx.Client)
        assert client.timeout == DEFAULT_TIMEOUT
    finally:
        client.close()


def test_default_async_client_type() -> None:
    client = default_async_http_client()
    assert isinstance(client, httpx.AsyncClient)
    assert client.timeout == DEFAULT_TIMEOUT
