"""Moments API: upload slots, binary upload, status probing and moment creation.

Uses SecureTransport for every call; only the readiness wait retries, and it
does so through ReadinessPoller.
"""
from __future__ import annotations

from typing import Any, Mapping

from loguru import logger
from pydantic import ValidationError

from moments_client.constants import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_PROCESSING_TIMEOUT_MS,
    MEDIA_STATUS_PATH,
    MEDIA_UPLOAD_URL_PATH,
    MOMENTS_PATH,
)
from moments_client.core import SERVICE_NAME
from moments_client.domain.errors import MomentsApiError, ProtocolError
from moments_client.domain.models import (
    CreateMomentInput,
    MediaKey,
    Moment,
    PollOutcome,
    StatusProbe,
    UploadDestination,
)
from moments_client.domain.readiness_poller import ReadinessPoller, Sleeper
from moments_client.domain.secure_transport import JSON_CONTENT_TYPE, SecureTransport


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class PoapMomentsApi:
    """Client for the POAP Moments media endpoints (implements MomentsApiProvider)."""

    def __init__(
        self,
        transport: SecureTransport,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        default_timeout_ms: int = DEFAULT_PROCESSING_TIMEOUT_MS,
        sleep: Sleeper | None = None,
    ) -> None:
        if int(poll_interval_ms) <= 0:
            raise ValueError("poll_interval_ms must be positive")
        if int(default_timeout_ms) < 0:
            raise ValueError("default_timeout_ms must not be negative")
        self._transport = transport
        self._poll_interval_ms = poll_interval_ms
        self._default_timeout_ms = default_timeout_ms
        self._sleep = sleep

    async def get_signed_url(self) -> UploadDestination:
        """Request a single-use upload destination. Missing url or key is a ProtocolError."""
        body = await self._transport.request(
            self._transport.url_for(MEDIA_UPLOAD_URL_PATH),
            "POST",
            body={},
        )
        if not isinstance(body, Mapping):
            raise ProtocolError("upload slot response is not an object")
        url = body.get("url")
        key = body.get("key")
        if not url or not key:
            raise ProtocolError("upload slot response missing required field: url or key")
        destination = UploadDestination(url=str(url), key=str(key))
        _log("upload_slot_acquired", media_key=destination.key)
        return destination

    get_upload_destination = get_signed_url

    async def upload_file(self, destination: UploadDestination, payload: bytes, content_type: str) -> None:
        # The signed URL authorizes the upload itself; the API key stays with the moments host.
        await self._transport.request(
            destination.url,
            "PUT",
            body=bytes(payload),
            headers={"Content-Type": content_type},
            authenticated=False,
        )
        _log("media_uploaded", media_key=destination.key, size=len(payload), content_type=content_type)

    async def probe(self, media_key: MediaKey) -> StatusProbe:
        try:
            body = await self._transport.request(
                self._transport.url_for(MEDIA_STATUS_PATH.format(key=media_key)),
                "GET",
            )
        except MomentsApiError as exc:
            logger.warning("media status check failed for {}: {}", media_key, exc)
            return StatusProbe.failed(str(exc))

        status = body.get("status") if isinstance(body, Mapping) else None
        if not isinstance(status, str) or not status:
            logger.warning("media status response for {} has no status: {!r}", media_key, body)
            return StatusProbe.failed("malformed status response")
        return StatusProbe.observed(status)

    async def fetch_media_status(self, media_key: MediaKey) -> str:
        probe = await self.probe(media_key)
        return probe.effective_status

    def create_poller(self, timeout_ms: int | None = None) -> ReadinessPoller:
        kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return ReadinessPoller(
            self.probe,
            poll_interval_ms=self._poll_interval_ms,
            timeout_ms=self._default_timeout_ms if timeout_ms is None else timeout_ms,
            **kwargs,
        )

    async def wait_for_media_processing(self, media_key: MediaKey, timeout_ms: int | None = None) -> PollOutcome:
        return await self.create_poller(timeout_ms).wait(media_key)

    async def create_moment(self, moment_input: CreateMomentInput) -> Moment:
        body = await self._transport.request(
            self._transport.url_for(MOMENTS_PATH),
            "POST",
            body=moment_input.to_payload(),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )
        if not isinstance(body, Mapping):
            raise ProtocolError("create moment response is not an object")
        try:
            moment = Moment.model_validate(body)
        except ValidationError as exc:
            raise ProtocolError(f"create moment response is malformed: {exc}") from exc
        _log("moment_created", moment_id=moment.id, media_keys=moment.media_keys)
        return moment
