"""Errors raised by the moments client.

Callers branch on the concrete type: an invalid file should be re-uploaded,
a timeout only means readiness could not be confirmed in time.
"""
from __future__ import annotations


class MomentsApiError(Exception):
    """Base error for moments client failures."""


class TransportError(MomentsApiError):
    """Raised on a non-2xx response or network failure. Never retried by the client."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProtocolError(MomentsApiError):
    """Raised when a response does not have the shape the service contract promises."""


class InvalidMediaFileError(MomentsApiError):
    """Raised when the service marked the uploaded media as unprocessable."""

    def __init__(self, media_key: str | None = None) -> None:
        message = "Media file is invalid and could not be processed."
        if media_key:
            message = f"Media file {media_key} is invalid and could not be processed."
        super().__init__(message)
        self.media_key = media_key


class MediaProcessingTimeoutError(MomentsApiError):
    """Raised when the media did not reach PROCESSED within the attempt budget."""

    def __init__(self, media_key: str, attempts: int) -> None:
        super().__init__(
            f"Exceeded maximum number of tries ({attempts}) to check media processing status for {media_key}."
        )
        self.media_key = media_key
        self.attempts = attempts
