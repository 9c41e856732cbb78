"""Request-side helpers: argument validation and multipart body framing."""

from mediacrush_client.core.multipart import build_upload_body, build_upload_headers
from mediacrush_client.core.validation import require_all_non_null, require_non_null

__all__ = [
    "build_upload_body",
    "build_upload_headers",
    "require_all_non_null",
    "require_non_null",
]
