"""Client-level constants shared across modules."""
from __future__ import annotations

from enum import Enum

MOMENTS_BASE_URL = "https://moments.poap.tech"
API_KEY_HEADER = "x-api-key"

MEDIA_UPLOAD_URL_PATH = "/moments/media-upload-url"
MEDIA_STATUS_PATH = "/media/{key}"
MOMENTS_PATH = "/moments"

DEFAULT_POLL_INTERVAL_MS = 2000
DEFAULT_PROCESSING_TIMEOUT_MS = 60000


class MediaStatus:
    """Processing states reported by the media service. Other values pass through as-is."""

    IN_PROCESS = "IN_PROCESS"
    PROCESSED = "PROCESSED"
    INVALID = "INVALID"


class PollerState(str, Enum):
    WAITING = "WAITING"
    SUCCEEDED = "SUCCEEDED"
    FAILED_INVALID = "FAILED_INVALID"
    FAILED_TIMEOUT = "FAILED_TIMEOUT"
