"""MediaCrush client: upload, inspect and delete files on MediaCrush.

WHY: MediaCrush hosts images, video and audio and converts them in the
background. Applications need a small, typed way to push files, follow
conversion, and read back metadata without hand-writing HTTP calls.

HOW: api.client.MediaCrushClient composes a Transport (httpx), argument
validation, and the RemoteFile response model into one synchronous client.

RULES:
- One blocking round trip per operation; no background threads
- Errors are raised, never logged or retried
"""

__version__ = "0.1.0"

from mediacrush_client.api import (  # noqa: E402
    FileStatus,
    FileType,
    MediaCrushClient,
    RemoteFile,
)
from mediacrush_client.config import ClientConfig  # noqa: E402

__all__ = [
    "ClientConfig",
    "FileStatus",
    "FileType",
    "MediaCrushClient",
    "RemoteFile",
    "__version__",
]
