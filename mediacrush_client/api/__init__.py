"""MediaCrush API package: HTTP transport, response models and the client.

RULES:
- All HTTP calls go through Transport (no direct httpx usage elsewhere)
- Response JSON is only turned into objects in models.py
"""

from mediacrush_client.api.client import MediaCrushClient
from mediacrush_client.api.errors import (
    InvalidArgumentError,
    MediaCrushError,
    ParseError,
    TransportError,
    UploadRejectedError,
)
from mediacrush_client.api.models import FileStatus, FileType, RemoteFile
from mediacrush_client.api.transport import Transport, TransportResponse

__all__ = [
    "FileStatus",
    "FileType",
    "InvalidArgumentError",
    "MediaCrushClient",
    "MediaCrushError",
    "ParseError",
    "RemoteFile",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UploadRejectedError",
]
