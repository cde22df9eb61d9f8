"""Port: operations of the moments media service. Implementations live in domain/infrastructure."""
from __future__ import annotations

from typing import Protocol

from moments_client.domain.models import CreateMomentInput, MediaKey, Moment, PollOutcome, UploadDestination


class MomentsApiProvider(Protocol):
    async def get_signed_url(self) -> UploadDestination: ...

    async def upload_file(self, destination: UploadDestination, payload: bytes, content_type: str) -> None: ...

    async def fetch_media_status(self, media_key: MediaKey) -> str:
        """Return the processing status; transient failures read as IN_PROCESS, never raise."""
        ...

    async def wait_for_media_processing(self, media_key: MediaKey, timeout_ms: int | None = None) -> PollOutcome:
        """Return once processed; raise InvalidMediaFileError or MediaProcessingTimeoutError otherwise."""
        ...

    async def create_moment(self, moment_input: CreateMomentInput) -> Moment: ...
