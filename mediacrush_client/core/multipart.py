"""Multipart/form-data body construction for file uploads.

WHY: The MediaCrush upload endpoint expects one "file" part framed with a
fixed boundary and an explicit binary transfer encoding, plus a handful of
browser-like headers. httpx's own multipart encoder picks a random boundary
and omits Content-Transfer-Encoding, so the body is assembled by hand.

HOW: build_upload_body() writes the part header, the raw bytes and the
closing delimiter into a single bytearray. build_upload_headers() returns
the matching request headers for that body.

RULES:
- Framing is: CRLF, --boundary, part headers, blank line, bytes, CRLF, --boundary--
- Part headers are ASCII; filenames containing quotes or CR/LF are rejected
- Content-Length always equals len(body)
"""

from __future__ import annotations

from mediacrush_client.api.errors import InvalidArgumentError
from mediacrush_client.config import CONTENT_DIVIDER

UPLOAD_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def build_upload_body(
    data: bytes,
    filename: str,
    mime_type: str,
    boundary: str = CONTENT_DIVIDER,
) -> bytes:
    """Frame data as a single "file" form-data part."""
    if any(ch in filename for ch in ('"', "\r", "\n")):
        raise InvalidArgumentError("filename", f"Invalid characters in filename: {filename!r}")

    header = (
        f"\r\n--{boundary}\r\n"
        f'Content-Disposition: form-data; name="file"; filename="{filename}"\r\n'
        f"Content-Type: {mime_type}\r\n"
        "Content-Transfer-Encoding: binary\r\n"
        "\r\n"
    )
    footer = f"\r\n--{boundary}--"

    try:
        body = bytearray(header.encode("ascii"))
    except UnicodeEncodeError:
        raise InvalidArgumentError(
            "filename", f"Filename must be ASCII: {filename!r}"
        ) from None
    body += data
    body += footer.encode("ascii")
    return bytes(body)


def build_upload_headers(body: bytes, boundary: str = CONTENT_DIVIDER) -> dict[str, str]:
    return {
        "Content-Length": str(len(body)),
        "Accept": UPLOAD_ACCEPT,
        "Accept-Encoding": "gzip, deflate",
        "X-Requested-With": "XMLHttpRequest",
        "Content-Type": f"multipart/form-data; boundary={boundary}",
    }
