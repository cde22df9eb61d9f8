from __future__ import annotations

from typing import Any

from loguru import logger

from moments_client.core import SERVICE_NAME
from moments_client.domain.models import CreateMomentInput, MediaKey, Moment
from moments_client.ports.moments_api import MomentsApiProvider


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class MomentUploadService:
    """
    Runs the upload pipeline: upload slot -> binary upload -> readiness wait -> moment creation.

    Each stage feeds the next and any failure aborts the pipeline unchanged. A
    moment is only created after the readiness wait returned, so it never
    references media that has not reached PROCESSED.
    """

    def __init__(self, api: MomentsApiProvider) -> None:
        self._api = api

    async def upload_media(
        self,
        payload: bytes,
        content_type: str,
        *,
        timeout_ms: int | None = None,
    ) -> MediaKey:
        if not content_type:
            raise ValueError("content_type is required")
        if timeout_ms is not None and timeout_ms < 0:
            raise ValueError("timeout_ms must not be negative")

        destination = await self._api.get_signed_url()
        _log("upload_started", media_key=destination.key, size=len(payload), content_type=content_type)
        await self._api.upload_file(destination, payload, content_type)
        await self._api.wait_for_media_processing(destination.key, timeout_ms)
        _log("upload_ready", media_key=destination.key)
        return destination.key

    async def create_moment_with_media(
        self,
        payload: bytes,
        content_type: str,
        moment_input: CreateMomentInput,
        *,
        timeout_ms: int | None = None,
    ) -> Moment:
        media_key = await self.upload_media(payload, content_type, timeout_ms=timeout_ms)
        moment_input = moment_input.model_copy(
            update={"media_keys": [*moment_input.media_keys, media_key]},
        )
        moment = await self._api.create_moment(moment_input)
        _log("pipeline_completed", media_key=media_key, moment_id=moment.id)
        return moment
