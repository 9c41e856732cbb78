"""Single-request HTTP transport built on httpx.

WHY: Every API operation is one blocking round trip: send a method, URL,
headers and optional body, then look at the status code and body text.
The facade needs HTTP error statuses back as data (404 on an existence
check means "no", 409 on an upload means "duplicate"), and only genuine
network failures as exceptions.

HOW: execute() opens a fresh httpx.Client for the duration of one request
and closes it afterwards. HTTP statuses, including 4xx/5xx, come back in a
TransportResponse. httpx.TransportError (DNS, connect, read, timeout) is
re-raised as our TransportError. An optional httpx transport can be
injected; tests pass httpx.MockTransport to stub or spy on the network.

RULES:
- Supported methods: GET, HEAD, POST, DELETE
- Every request carries the configured User-Agent header
- No connection is reused across execute() calls
- Redirects are followed; the final response is returned
- Timeouts are httpx's defaults
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx

from mediacrush_client.api.errors import InvalidArgumentError, TransportError
from mediacrush_client.config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = frozenset({"GET", "HEAD", "POST", "DELETE"})


@dataclass
class TransportResponse:
    """Status code, body text and headers of one completed exchange."""

    status_code: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport:
    """Issues one HTTP request per execute() call."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._user_agent = user_agent
        self._transport = transport

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
        data: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        """Send one request and return its status and body.

        Args:
            method: One of GET, HEAD, POST, DELETE (case-insensitive).
            url: Absolute request URL.
            headers: Extra request headers.
            content: Raw request body.
            data: Form fields, sent url-encoded. Ignored when content is given.

        Returns:
            TransportResponse for any HTTP status, success or not.

        Raises:
            InvalidArgumentError: unsupported method.
            TransportError: the exchange failed below the HTTP layer.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise InvalidArgumentError("method", f"Unsupported HTTP method: {method}")

        kwargs: dict = {"headers": dict(headers or {})}
        if content is not None:
            kwargs["content"] = content
        elif data is not None:
            kwargs["data"] = dict(data)

        try:
            with httpx.Client(
                headers={"User-Agent": self._user_agent},
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                resp = client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logger.debug("%s %s -> %d", method, url, resp.status_code)
        return TransportResponse(
            status_code=resp.status_code,
            text=resp.text,
            headers=dict(resp.headers),
        )
