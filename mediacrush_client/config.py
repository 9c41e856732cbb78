"""Configuration constants and the client configuration object.

WHY: The MediaCrush API location, the schema version used for parsing,
the client identification header, and the accepted upload extensions are
plain data. Keeping them in one module makes them easy to find and to
override without touching request logic.

HOW: Constants are module-level strings, floats and sets. ClientConfig is
a frozen dataclass built from those defaults and held by each
MediaCrushClient instance, so there is no process-wide mutable state.
load_config() is the opt-in path for reading overrides from a .env file
via python-dotenv.

RULES:
- DEFAULT_API_URL is MEDIACRUSH_URL + API_DIRECTORY and always ends in "/"
- api_version affects response parsing only, never request URLs
- The client never reads the environment unless load_config() is called
- ClientConfig is immutable; use with_api_url()/with_api_version() for copies
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

from mediacrush_client import __version__

# ---------------------------------------------------------------------------
# API location and versioning
# ---------------------------------------------------------------------------

MEDIACRUSH_URL = "https://www.mediacru.sh/"
API_DIRECTORY = "api/"
DEFAULT_API_URL = MEDIACRUSH_URL + API_DIRECTORY

API_VERSION = 2.0
"""Newest schema version understood by the response parser."""

DEFAULT_USER_AGENT = f"mediacrush-client/{__version__}"

# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------

CONTENT_DIVIDER = "----------MediaCrushClientBoundary7MA4YWxkTrZu0gW"
"""Fixed multipart/form-data boundary used for every file upload."""

SUPPORTED_EXTENSIONS: set[str] = {
    ".png", ".jpg", ".jpeg", ".gif",
    ".mp4", ".ogv",
    ".mp3", ".ogg",
}
"""Extensions accepted for upload (lowercase, with dot)."""


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every request a MediaCrushClient makes.

    RULES:
    - api_url is normalized to end with "/" so paths can be appended
    - api_version must be positive
    """

    api_url: str = DEFAULT_API_URL
    api_version: float = API_VERSION
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not self.api_url or not self.api_url.strip():
            raise ValueError("api_url must not be empty")
        if not self.api_url.endswith("/"):
            object.__setattr__(self, "api_url", self.api_url + "/")
        if self.api_version <= 0:
            raise ValueError(f"api_version must be positive, got {self.api_version}")

    def with_api_url(self, api_url: str) -> ClientConfig:
        return replace(self, api_url=api_url)

    def with_api_version(self, api_version: float) -> ClientConfig:
        return replace(self, api_version=api_version)


def load_config() -> ClientConfig:
    """Build a ClientConfig from the environment (and a .env file if present).

    WHY: Hosts that deploy against a self-hosted MediaCrush instance want to
    point the client elsewhere without code changes.

    HOW: Loads .env via python-dotenv, then reads MEDIACRUSH_API_URL and
    MEDIACRUSH_API_VERSION, falling back to the module defaults.

    RULES:
    - Only called explicitly; importing this module reads nothing
    - Raises ValueError if MEDIACRUSH_API_VERSION is not a number
    """
    load_dotenv()
    api_url = os.getenv("MEDIACRUSH_API_URL", "").strip() or DEFAULT_API_URL
    raw_version = os.getenv("MEDIACRUSH_API_VERSION", "").strip()
    try:
        api_version = float(raw_version) if raw_version else API_VERSION
    except ValueError:
        raise ValueError(
            f"MEDIACRUSH_API_VERSION must be a number, got {raw_version!r}"
        ) from None
    return ClientConfig(api_url=api_url, api_version=api_version)
