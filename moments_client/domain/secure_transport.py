"""Request-signing transport shared by all moments API operations.

Wraps the HTTP port: injects the API key header, encodes bodies, parses
responses and maps every failure to TransportError. Never retries.
"""
from __future__ import annotations

import json
from typing import Any

from moments_client.constants import API_KEY_HEADER
from moments_client.domain.errors import TransportError
from moments_client.ports.http_client import AbstractHttpClient, HttpClientError, RequestTimeout

JSON_CONTENT_TYPE = "application/json"


class SecureTransport:
    """Performs signed requests. Holds no mutable state, so one instance can serve concurrent calls."""

    def __init__(
        self,
        client: AbstractHttpClient,
        api_key: str,
        *,
        base_url: str,
        connect_timeout_seconds: float = 5.0,
        read_timeout_seconds: float = 30.0,
    ) -> None:
        if not api_key:
            raise ValueError("api_key must not be empty")
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = RequestTimeout(
            connect_seconds=connect_timeout_seconds,
            read_seconds=read_timeout_seconds,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"SecureTransport(base_url={self._base_url!r})"

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def request(
        self,
        url: str,
        method: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        *,
        authenticated: bool = True,
    ) -> Any:
        """Send the request and return the parsed body (JSON, text, or None when empty).

        dict/list bodies are sent as JSON, bytes are sent raw. The API key
        header overrides any caller-supplied header of the same name.
        """
        merged = dict(headers) if headers else {}
        content = self._encode_body(body, merged)
        if authenticated:
            for name in [h for h in merged if h.lower() == API_KEY_HEADER]:
                del merged[name]
            merged[API_KEY_HEADER] = self._api_key

        method = method.upper()
        try:
            response = await self._client.request(
                method,
                url,
                timeout=self._timeout,
                content=content,
                headers=merged,
            )
            response.raise_for_status()
        except HttpClientError as exc:
            raise TransportError(str(exc), status_code=exc.status_code, body=exc.body) from exc

        return self._parse_body(response.text)

    @staticmethod
    def _encode_body(body: Any, headers: dict[str, str]) -> bytes | None:
        if body is None:
            return None
        if isinstance(body, (bytes, bytearray, memoryview)):
            return bytes(body)
        if isinstance(body, str):
            return body.encode()
        if not any(h.lower() == "content-type" for h in headers):
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return json.dumps(body).encode()

    @staticmethod
    def _parse_body(text: str) -> Any:
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text
