"""Client composition root: build and lifecycle-manage concrete dependencies.

Composition may: import concrete classes, call factories, store interface types,
manage high-level lifecycle.
"""
from __future__ import annotations

from loguru import logger

from moments_client.application.upload_service import MomentUploadService
from moments_client.config.settings import Settings
from moments_client.domain.moments_api import PoapMomentsApi
from moments_client.domain.secure_transport import SecureTransport
from moments_client.infrastructure.http.factory import create_http_client
from moments_client.ports.http_client import AbstractHttpClient


class ClientDependencies:
    """Holds wired client dependencies and their lifecycle."""

    def __init__(self, *, settings: Settings) -> None:
        self._settings = settings
        self._http_client: AbstractHttpClient | None = None
        self._api: PoapMomentsApi | None = None
        self._upload_service: MomentUploadService | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def api(self) -> PoapMomentsApi:
        if self._api is None:
            raise RuntimeError("api is not initialized")
        return self._api

    @property
    def upload_service(self) -> MomentUploadService:
        if self._upload_service is None:
            raise RuntimeError("upload_service is not initialized")
        return self._upload_service

    def connect(self, http_client: AbstractHttpClient | None = None) -> None:
        self._http_client = http_client or create_http_client(self._settings)
        transport = SecureTransport(
            self._http_client,
            self._settings.api_key,
            base_url=self._settings.base_url,
            connect_timeout_seconds=self._settings.http_connect_timeout_seconds,
            read_timeout_seconds=self._settings.http_read_timeout_seconds,
        )
        self._api = PoapMomentsApi(
            transport,
            poll_interval_ms=self._settings.poll_interval_ms,
            default_timeout_ms=self._settings.processing_timeout_ms,
        )
        self._upload_service = MomentUploadService(self._api)

    async def close(self) -> None:
        if self._http_client is not None:
            try:
                await self._http_client.close()
            except Exception as exc:
                logger.warning("http client close failed: {}", exc)
            self._http_client = None

        self._api = None
        self._upload_service = None

    async def __aenter__(self) -> "ClientDependencies":
        self.connect()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


def create_client_dependencies(settings: Settings | None = None) -> ClientDependencies:
    return ClientDependencies(settings=settings or Settings())
