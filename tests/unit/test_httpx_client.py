from __future__ import annotations

import json

import httpx
import pytest

from moments_client.infrastructure.http.httpx_client import HttpxHttpClient
from moments_client.ports.http_client import HttpClientError, HttpClientTimeoutError, RequestTimeout

TIMEOUT = RequestTimeout(connect_seconds=1.0, read_seconds=2.0)


def _client(handler) -> HttpxHttpClient:
    return HttpxHttpClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_request_sends_method_body_and_headers():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "PROCESSED"})

    client = _client(handler)
    response = await client.request(
        "PUT",
        "https://storage.example/put",
        timeout=TIMEOUT,
        content=b"payload",
        headers={"Content-Type": "image/png"},
    )
    await client.close()

    assert response.status_code == 200
    assert json.loads(response.text) == {"status": "PROCESSED"}
    assert seen[0].method == "PUT"
    assert seen[0].content == b"payload"
    assert seen[0].headers["content-type"] == "image/png"
    response.raise_for_status()


@pytest.mark.asyncio
async def test_raise_for_status_maps_to_http_client_error_with_status_and_body():
    client = _client(lambda request: httpx.Response(404, text="no such media"))

    response = await client.request("GET", "https://moments.example/media/x", timeout=TIMEOUT)
    await client.close()

    with pytest.raises(HttpClientError) as excinfo:
        response.raise_for_status()
    assert excinfo.value.status_code == 404
    assert excinfo.value.body == "no such media"


@pytest.mark.asyncio
async def test_timeout_maps_to_http_client_timeout_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    client = _client(handler)
    with pytest.raises(HttpClientTimeoutError):
        await client.request("GET", "https://moments.example/media/x", timeout=TIMEOUT)
    await client.close()


@pytest.mark.asyncio
async def test_network_error_maps_to_http_client_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(HttpClientError) as excinfo:
        await client.request("POST", "https://moments.example/moments", timeout=TIMEOUT, content=b"{}")
    await client.close()

    assert not isinstance(excinfo.value, HttpClientTimeoutError)
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_request_follows_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/media/old":
            return httpx.Response(307, headers={"Location": "https://moments.example/media/new"})
        return httpx.Response(200, json={"status": "PROCESSED"})

    client = _client(handler)
    response = await client.request("GET", "https://moments.example/media/old", timeout=TIMEOUT)
    await client.close()

    assert response.status_code == 200
    assert response.url == "https://moments.example/media/new"
    assert json.loads(response.text) == {"status": "PROCESSED"}
