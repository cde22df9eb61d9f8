"""Settings for the moments client."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from moments_client.constants import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_PROCESSING_TIMEOUT_MS,
    MOMENTS_BASE_URL,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_key: str = Field(..., validation_alias="MOMENTS_API_KEY", repr=False)
    base_url: str = Field(MOMENTS_BASE_URL, validation_alias="MOMENTS_BASE_URL")

    # Readiness polling. Worst-case wait is timeout + one interval (initial delay before the first probe).
    poll_interval_ms: int = Field(DEFAULT_POLL_INTERVAL_MS, gt=0, validation_alias="MEDIA_POLL_INTERVAL_MS")
    processing_timeout_ms: int = Field(DEFAULT_PROCESSING_TIMEOUT_MS, ge=0, validation_alias="MEDIA_PROCESSING_TIMEOUT_MS")

    http_client_backend: str = Field("httpx", validation_alias="HTTP_CLIENT_BACKEND")
    http_connect_timeout_seconds: float = Field(5.0, validation_alias="HTTP_CONNECT_TIMEOUT_SECONDS")
    http_read_timeout_seconds: float = Field(30.0, validation_alias="HTTP_READ_TIMEOUT_SECONDS")
    http_user_agent: str = Field("", validation_alias="HTTP_USER_AGENT")
