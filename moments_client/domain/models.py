"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from moments_client.constants import MediaStatus, PollerState

MediaKey = str


@dataclass(frozen=True)
class UploadDestination:
    """Single-use signed URL and the media key it uploads to."""

    url: str
    key: MediaKey


@dataclass(frozen=True)
class StatusProbe:
    """Outcome of one status check: an observed status, or a transient failure.

    A transient probe counts as still processing; only an explicit INVALID is a hard failure.
    """

    status: str | None
    transient: bool = False
    error: str | None = None

    @classmethod
    def observed(cls, status: str) -> "StatusProbe":
        return cls(status=status)

    @classmethod
    def failed(cls, error: str) -> "StatusProbe":
        return cls(status=None, transient=True, error=error)

    @property
    def effective_status(self) -> str:
        if self.transient or not self.status:
            return MediaStatus.IN_PROCESS
        return self.status


@dataclass(frozen=True)
class PollOutcome:
    media_key: MediaKey
    attempts: int
    state: PollerState


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateMomentInput(_CamelModel):
    """Payload for creating a moment; serialized with the service's camelCase field names."""

    author: str
    drop_id: int
    token_id: int | None = None
    description: str | None = None
    media_keys: list[MediaKey] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Moment(_CamelModel):
    """Moment resource as returned by the service. Unknown fields are preserved."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str | int
    author: str | None = None
    created_on: str | None = None
    drop_id: int | None = None
    token_id: int | None = None
    description: str | None = None
    media_keys: list[MediaKey] = Field(default_factory=list)


CreateMomentResponse = Moment
