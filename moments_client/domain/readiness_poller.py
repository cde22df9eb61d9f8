"""Readiness poller: waits for the media service to finish processing one media key.

Timing is attempt-count based, not wall-clock based. The first probe happens
after one interval, so the worst-case wait before a timeout is
(max_attempts + 1) * poll_interval, one interval longer than timeout_ms.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from loguru import logger

from moments_client.constants import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_PROCESSING_TIMEOUT_MS,
    MediaStatus,
    PollerState,
)
from moments_client.core import SERVICE_NAME
from moments_client.domain.errors import InvalidMediaFileError, MediaProcessingTimeoutError
from moments_client.domain.models import MediaKey, PollOutcome, StatusProbe

Prober = Callable[[MediaKey], Awaitable[StatusProbe]]
Sleeper = Callable[[float], Awaitable[Any]]


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class ReadinessPoller:
    """
    Polls a status prober until the media is PROCESSED, INVALID, or the attempt budget runs out.

    max_attempts = timeout_ms // poll_interval_ms. The counter is checked before
    each probe, so exhausting it never costs an extra network call. One instance
    polls one media key; the object is not meant to be reused concurrently.
    """

    def __init__(
        self,
        prober: Prober,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: int = DEFAULT_PROCESSING_TIMEOUT_MS,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        poll_interval_ms = int(poll_interval_ms)
        timeout_ms = int(timeout_ms)
        if poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")
        if timeout_ms < 0:
            raise ValueError("timeout_ms must not be negative")
        self._prober = prober
        self._poll_interval_ms = poll_interval_ms
        self._timeout_ms = timeout_ms
        self._sleep = sleep
        self.state = PollerState.WAITING
        self.attempts = 0

    @property
    def max_attempts(self) -> int:
        return self._timeout_ms // self._poll_interval_ms

    async def _suspend(self) -> None:
        await self._sleep(self._poll_interval_ms / 1000)

    async def wait(self, media_key: MediaKey) -> PollOutcome:
        """Return once the media is PROCESSED.

        Raises InvalidMediaFileError on an INVALID status and
        MediaProcessingTimeoutError when the budget is exhausted. Cancelling the
        awaiting task stops the loop at the current sleep or probe.
        """
        self.state = PollerState.WAITING
        self.attempts = 0
        max_attempts = self.max_attempts
        _log(
            "media_poll_started",
            media_key=media_key,
            poll_interval_ms=self._poll_interval_ms,
            max_attempts=max_attempts,
        )

        await self._suspend()
        while self.attempts < max_attempts:
            probe = await self._prober(media_key)
            self.attempts += 1
            status = probe.effective_status

            if status == MediaStatus.PROCESSED:
                self.state = PollerState.SUCCEEDED
                _log("media_processed", media_key=media_key, attempts=self.attempts)
                return PollOutcome(media_key=media_key, attempts=self.attempts, state=self.state)

            if status == MediaStatus.INVALID:
                self.state = PollerState.FAILED_INVALID
                _log("media_invalid", media_key=media_key, attempts=self.attempts)
                raise InvalidMediaFileError(media_key)

            _log(
                "media_still_processing",
                media_key=media_key,
                attempt=self.attempts,
                status=status,
                transient=probe.transient,
            )
            await self._suspend()

        self.state = PollerState.FAILED_TIMEOUT
        _log("media_poll_timeout", media_key=media_key, attempts=self.attempts)
        raise MediaProcessingTimeoutError(media_key, self.attempts)
