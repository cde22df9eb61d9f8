"""
Integration tests for PoapMomentsApi against a real moments service.

Requires network and MOMENTS_API_KEY (MOMENTS_BASE_URL optional). Run with:
  pytest tests/integration -m integration -v
"""
from __future__ import annotations

import base64
import os

import pytest

from moments_client.composition import create_client_dependencies
from moments_client.constants import MediaStatus

# 1x1 transparent PNG
TINY_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not os.getenv("MOMENTS_API_KEY"), reason="MOMENTS_API_KEY is not set"),
]


@pytest.fixture
async def deps():
    d = create_client_dependencies()
    d.connect()
    yield d
    await d.close()


@pytest.mark.asyncio
async def test_upload_slot_has_url_and_key(deps):
    destination = await deps.api.get_signed_url()
    assert destination.url.startswith("http")
    assert destination.key


@pytest.mark.asyncio
async def test_upload_png_and_wait_for_processing(deps):
    key = await deps.upload_service.upload_media(TINY_PNG, "image/png")
    assert await deps.api.fetch_media_status(key) == MediaStatus.PROCESSED
