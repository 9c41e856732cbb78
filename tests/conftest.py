"""Shared fixtures for the mediacrush_client test suite.

WHY: Every client test needs a MediaCrushClient wired to a fake server and
a record of the requests it sent. Centralizing the wiring keeps each test
focused on one response and one expectation.

HOW: make_client() wraps a handler function in httpx.MockTransport, hands
it to a Transport, and returns the client together with the list of
requests the handler saw. Sample payloads mirror the MediaCrush v2 JSON.

RULES:
- No test talks to the real network
- API_URL is a fake host; tests assert on paths relative to it
- Payload fixtures return fresh copies so tests may mutate them
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from mediacrush_client.api.client import MediaCrushClient
from mediacrush_client.api.transport import Transport
from mediacrush_client.config import ClientConfig

API_URL = "https://media.example.test/api/"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------

GIF_INFO: Dict[str, Any] = {
    "hash": "CPvuR5lRhmS0",
    "type": "image/gif",
    "original": "/CPvuR5lRhmS0.gif",
    "compression": 8.93,
    "files": [
        {"file": "/CPvuR5lRhmS0.mp4", "type": "video/mp4", "url": "https://mediacru.sh/CPvuR5lRhmS0.mp4"},
        {"file": "/CPvuR5lRhmS0.ogv", "type": "video/ogg", "url": "https://mediacru.sh/CPvuR5lRhmS0.ogv"},
        {"file": "/CPvuR5lRhmS0.gif", "type": "image/gif", "url": "https://mediacru.sh/CPvuR5lRhmS0.gif"},
    ],
    "extras": [
        {"file": "/thumbQ1w2E3r.jpg", "type": "image/jpeg", "url": "https://mediacru.sh/thumbQ1w2E3r.jpg"},
    ],
    "blob_type": "video",
    "metadata": {
        "dimensions": {"width": 500, "height": 281},
        "duration": 3.48,
        "has_audio": False,
        "has_video": True,
    },
    "flags": {"autoplay": True, "loop": True, "mute": True},
    "title": "Cat",
    "description": None,
}

PNG_INFO: Dict[str, Any] = {
    "hash": "tVWMM_ziA3nm",
    "type": "image/png",
    "original": "/tVWMM_ziA3nm.png",
    "compression": 1.0,
    "files": [
        {"file": "/tVWMM_ziA3nm.png", "type": "image/png", "url": "https://mediacru.sh/tVWMM_ziA3nm.png"},
    ],
    "extras": [],
    "blob_type": "image",
    "metadata": {"dimensions": {"width": 64, "height": 64}},
    "flags": {},
    "title": None,
    "description": None,
}


@pytest.fixture
def gif_info() -> Dict[str, Any]:
    return copy.deepcopy(GIF_INFO)


@pytest.fixture
def png_info() -> Dict[str, Any]:
    return copy.deepcopy(PNG_INFO)


# ---------------------------------------------------------------------------
# Stub server wiring
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client() -> Callable[..., Tuple[MediaCrushClient, List[httpx.Request]]]:
    """Factory: make_client(handler, api_version=2.0) -> (client, requests)."""

    def _make(handler: Handler, api_version: float = 2.0):
        requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        transport = Transport(transport=httpx.MockTransport(_record))
        config = ClientConfig(api_url=API_URL, api_version=api_version)
        return MediaCrushClient(config=config, transport=transport), requests

    return _make

