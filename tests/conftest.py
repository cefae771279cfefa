"""
Shared fixtures: settings pointed at a fake EPIC server, PNG payloads,
and a catalog client whose transport is an ``httpx.MockTransport``.
"""

import io
import json

import httpx
import pytest
from PIL import Image

from earthgif.catalog import CatalogClient
from earthgif.compose import CaptionStyle
from earthgif.config import Settings


API_BASE = "https://epic.test/api/natural"
ARCHIVE_BASE = "https://epic.test/archive/natural"

RED = (204, 0, 0)
GREEN = (0, 204, 0)
BLUE = (0, 0, 204)


def png_bytes(color=RED, size=(200, 200)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def json_response(payload) -> httpx.Response:
    return httpx.Response(200, content=json.dumps(payload).encode())


@pytest.fixture
def settings(tmp_path):
    return Settings(
        api_key="SECRET",
        api_base=API_BASE,
        archive_base=ARCHIVE_BASE,
        output=tmp_path / "earth.gif",
        frame_path=tmp_path / "earth.png",
        concurrency=4,
    )


@pytest.fixture
def style():
    """Bundled font so tests don't depend on Helvetica.ttf being present."""
    return CaptionStyle(font_path=None, font_size=20)


@pytest.fixture
def make_client(settings):
    """Build a CatalogClient that answers through *handler*."""

    def _make(handler) -> CatalogClient:
        transport = httpx.MockTransport(handler)
        return CatalogClient(settings, client=httpx.AsyncClient(transport=transport))

    return _make
