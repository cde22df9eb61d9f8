"""HTTP client factory: builds AbstractHttpClient from settings (no provider logic in composition)."""
from __future__ import annotations

import httpx

from moments_client.config.settings import Settings
from moments_client.infrastructure.http.httpx_client import HttpxHttpClient
from moments_client.ports.http_client import AbstractHttpClient


def create_http_client(settings: Settings) -> AbstractHttpClient:
    """Build an HTTP client from settings. Timeouts are applied per-request by the adapter."""
    backend = settings.http_client_backend.strip().lower()

    if backend == "httpx":
        headers = {"User-Agent": settings.http_user_agent} if settings.http_user_agent else None
        return HttpxHttpClient(httpx.AsyncClient(headers=headers))

    raise ValueError(f"Unsupported http client backend: {backend}")
