"""Exception hierarchy for the MediaCrush client.

WHY: Callers need to tell apart bad input, a dead network, a garbled
response, and the server refusing a request, and they need the specific
refusal reason (duplicate, rate limit, wrong owner, ...) to decide what
to show or whether to try again later.

HOW: Everything derives from MediaCrushError. Server refusals derive from
UploadRejectedError and carry the status code that triggered them, whether
it came from the HTTP status line or from an "error" field embedded in a
200 response body.

RULES:
- InvalidArgumentError is raised before any network I/O
- TransportError wraps socket/DNS/timeout failures, never HTTP statuses
- The library raises these; it never logs or retries them
"""

from __future__ import annotations


class MediaCrushError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(MediaCrushError, ValueError):
    """A required argument was None or empty."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"{name} must not be null or empty")


class RequestError(MediaCrushError):
    """The request could not be completed."""


class TransportError(RequestError):
    """The HTTP exchange failed below the HTTP layer (DNS, connect, read)."""


class ParseError(MediaCrushError):
    """The response body was not JSON or did not have the expected shape."""


class ProcessingTimeoutError(MediaCrushError, TimeoutError):
    """A file did not reach a final status within the allowed time."""


class UploadRejectedError(MediaCrushError):
    """The server answered, but refused the request.

    RULES:
    - status_code is the HTTP status or the embedded JSON error code
    - message is a human-readable summary
    """

    default_message = "The server rejected the request."

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        self.status_code = status_code
        self.message = message or self.default_message
        if status_code is None:
            super().__init__(self.message)
        else:
            super().__init__(f"{self.message} ({status_code})")


class UploadConflictError(UploadRejectedError):
    default_message = "This file was already uploaded."


class RateLimitError(UploadRejectedError):
    default_message = "The rate limit was exceeded."


class UnsupportedFileTypeError(UploadRejectedError):
    default_message = "The file extension is not acceptable."


class InvalidUrlError(UploadRejectedError):
    default_message = "The URL is invalid."


class RemoteNotFoundError(UploadRejectedError):
    default_message = "The file requested does not exist."


class NotFoundError(UploadRejectedError):
    default_message = "There is no file with that hash."


class OwnershipMismatchError(UploadRejectedError):
    default_message = "The IP does not match the uploader of this file."


class UnknownServerError(UploadRejectedError):
    default_message = "The server responded with an unknown error code."
