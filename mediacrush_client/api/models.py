"""MediaCrush response dataclasses and file type mapping.

WHY: The API returns loosely shaped JSON for file metadata, processing
status and uploads. Typed objects make the fields explicit and give
callers enums instead of raw MIME and status strings.

HOW: FileType maps accepted extensions and MIME strings to one enum value
per media format. FileStatus maps the server's processing states onto the
four states callers care about. RemoteFile is built in one step from the
metadata payload plus the separately reported status; payload shape is
checked with jsonschema before any field is read.

RULES:
- Fields marked with since=2.0 are only read when api_version >= 2.0
- RemoteFile is never created locally except from a payload or as the
  NOT_FOUND marker
- Status transitions: PROCESSING -> DONE | ERROR; NOT_FOUND comes only
  from the existence check, never from a payload
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field, fields
from pathlib import PurePath
from typing import Any

import jsonschema

from mediacrush_client.api.errors import ParseError, UnsupportedFileTypeError
from mediacrush_client.config import API_VERSION, SUPPORTED_EXTENSIONS

# ---------------------------------------------------------------------------
# File types
# ---------------------------------------------------------------------------


class FileType(str, enum.Enum):
    """Uploadable media formats, valued by their canonical MIME type."""

    PNG = "image/png"
    JPEG = "image/jpeg"
    GIF = "image/gif"
    MP4 = "video/mp4"
    OGV = "video/ogg"
    MP3 = "audio/mpeg"
    OGG = "audio/ogg"

    def __str__(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return self.value

    @property
    def blob_type(self) -> str:
        """One of "image", "video" or "audio"."""
        return self.value.split("/", 1)[0]

    @property
    def file_extension(self) -> str:
        return _CANONICAL_EXTENSIONS[self]

    @classmethod
    def from_extension(cls, extension: str | None) -> FileType | None:
        """Resolve "png", ".PNG", "jpeg", ... ; None when unmapped."""
        if not extension:
            return None
        ext = extension.lower()
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in SUPPORTED_EXTENSIONS:
            return None
        return _EXTENSION_MAP[ext]

    @classmethod
    def from_content_type(cls, content_type: str | None) -> FileType | None:
        """Resolve a MIME string (parameters ignored); None when unmapped."""
        if not content_type:
            return None
        mime = content_type.split(";", 1)[0].strip().lower()
        return _CONTENT_TYPE_MAP.get(mime)

    @classmethod
    def for_path(cls, path: str | PurePath) -> FileType:
        """Resolve from a filename suffix.

        Raises:
            UnsupportedFileTypeError: the suffix is not an accepted format.
        """
        suffix = PurePath(path).suffix
        file_type = cls.from_extension(suffix)
        if file_type is None:
            raise UnsupportedFileTypeError(
                None, f"Unknown file type: {suffix or '(no extension)'}"
            )
        return file_type


_EXTENSION_MAP: dict[str, FileType] = {
    ".png": FileType.PNG,
    ".jpg": FileType.JPEG,
    ".jpeg": FileType.JPEG,
    ".gif": FileType.GIF,
    ".mp4": FileType.MP4,
    ".ogv": FileType.OGV,
    ".mp3": FileType.MP3,
    ".ogg": FileType.OGG,
}

_CANONICAL_EXTENSIONS: dict[FileType, str] = {
    FileType.PNG: ".png",
    FileType.JPEG: ".jpg",
    FileType.GIF: ".gif",
    FileType.MP4: ".mp4",
    FileType.OGV: ".ogv",
    FileType.MP3: ".mp3",
    FileType.OGG: ".ogg",
}

_CONTENT_TYPE_MAP: dict[str, FileType] = {ft.value: ft for ft in FileType}
_CONTENT_TYPE_MAP["image/jpg"] = FileType.JPEG


# ---------------------------------------------------------------------------
# Processing status
# ---------------------------------------------------------------------------


class FileStatus(str, enum.Enum):
    """Lifecycle of an uploaded file on the server.

    RULES:
    - PROCESSING: conversion still running
    - DONE: all variants are available
    - ERROR: conversion failed, timed out, or the media was unrecognised
    - NOT_FOUND: the existence check said the hash is unknown
    """

    PROCESSING = "processing"
    DONE = "done"
    NOT_FOUND = "not_found"
    ERROR = "error"

    @property
    def is_final(self) -> bool:
        return self is not FileStatus.PROCESSING

    @classmethod
    def from_wire(cls, value: str | None) -> FileStatus:
        if value is None:
            return cls.PROCESSING
        return _WIRE_STATUS.get(value.strip().lower(), cls.ERROR)


_WIRE_STATUS: dict[str, FileStatus] = {
    "done": FileStatus.DONE,
    "ready": FileStatus.DONE,
    "pending": FileStatus.PROCESSING,
    "processing": FileStatus.PROCESSING,
    "error": FileStatus.ERROR,
    "timeout": FileStatus.ERROR,
    "unrecognised": FileStatus.ERROR,
    "internal_error": FileStatus.ERROR,
}


# ---------------------------------------------------------------------------
# Payload schemas
# ---------------------------------------------------------------------------

_NULLABLE_STRING: dict[str, Any] = {"type": ["string", "null"]}
_NULLABLE_NUMBER: dict[str, Any] = {"type": ["number", "null"]}

FILE_VARIANT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "file": _NULLABLE_STRING,
        "type": _NULLABLE_STRING,
        "url": _NULLABLE_STRING,
    },
}

FILE_METADATA_SCHEMA: dict[str, Any] = {
    "type": ["object", "null"],
    "properties": {
        "dimensions": {
            "type": ["object", "null"],
            "properties": {"width": _NULLABLE_NUMBER, "height": _NULLABLE_NUMBER},
        },
        "duration": _NULLABLE_NUMBER,
        "has_audio": {"type": ["boolean", "null"]},
    },
}

FILE_INFO_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["hash", "type"],
    "properties": {
        "hash": {"type": "string", "minLength": 1},
        "type": {"type": "string"},
        "original": {"type": ["string", "null"]},
        "compression": {"type": ["number", "null"]},
        "files": {"type": ["array", "null"], "items": FILE_VARIANT_SCHEMA},
        "extras": {"type": ["array", "null"], "items": FILE_VARIANT_SCHEMA},
        "blob_type": {"type": ["string", "null"]},
        "metadata": FILE_METADATA_SCHEMA,
        "flags": {"type": ["object", "null"], "additionalProperties": {"type": "boolean"}},
        "title": {"type": ["string", "null"]},
        "description": {"type": ["string", "null"]},
    },
}

UPLOAD_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "hash": {"type": ["string", "null"]},
        "error": {"type": ["string", "integer", "null"]},
    },
}


def parse_json(text: str) -> Any:
    """Decode a response body, raising ParseError on malformed JSON."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Malformed JSON response: {exc}") from exc


def validate_payload(payload: Any, schema: dict[str, Any], what: str) -> None:
    try:
        jsonschema.validate(instance=payload, schema=schema)
    except jsonschema.ValidationError as exc:
        raise ParseError(f"Unexpected {what} shape: {exc.message}") from exc


# ---------------------------------------------------------------------------
# Remote file
# ---------------------------------------------------------------------------


def _since(version: float) -> dict[str, float]:
    return {"since": version}


@dataclass
class RemoteFileVariant:
    """One converted rendition of a file (e.g. the mp4 made from a gif)."""

    file: str
    type: str
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> RemoteFileVariant:
        return cls(file=data.get("file") or "", type=data.get("type") or "", url=data.get("url"))


@dataclass
class RemoteFile:
    """Metadata and processing status of a file hosted on MediaCrush.

    WHY: Callers want one object that says what the file is, where its
    converted variants live, and whether conversion has finished.

    HOW: from_dict() reads the per-file JSON object and attaches the status
    reported by the status endpoint. Fields introduced in API version 2 are
    left as None when parsing with an older api_version.

    RULES:
    - hash is always set
    - status is None when the response did not report one (info lists)
    - file_type is None when the server reports a MIME type we cannot upload
    - width/height for images and video, duration for audio and video,
      thumbnail for video; all optional
    """

    hash: str
    status: FileStatus | None = None
    file_type: FileType | None = None
    mime_type: str | None = None
    original: str | None = None
    compression: float | None = None
    files: list[RemoteFileVariant] = field(default_factory=list)

    blob_type: str | None = field(default=None, metadata=_since(2.0))
    title: str | None = field(default=None, metadata=_since(2.0))
    description: str | None = field(default=None, metadata=_since(2.0))
    width: int | None = field(default=None, metadata=_since(2.0))
    height: int | None = field(default=None, metadata=_since(2.0))
    duration: float | None = field(default=None, metadata=_since(2.0))
    has_audio: bool | None = field(default=None, metadata=_since(2.0))
    thumbnail: str | None = field(default=None, metadata=_since(2.0))
    flags: dict[str, bool] | None = field(default=None, metadata=_since(2.0))

    @property
    def is_ready(self) -> bool:
        return self.status is FileStatus.DONE

    @classmethod
    def not_found(cls, hash: str) -> RemoteFile:
        return cls(hash=hash, status=FileStatus.NOT_FOUND)

    @classmethod
    def from_dict(
        cls,
        data: Any,
        api_version: float = API_VERSION,
        status: FileStatus | None = None,
    ) -> RemoteFile:
        """Parse one file object from an info, list or status response.

        Raises:
            ParseError: data is not an object or lacks a string hash/type.
        """
        validate_payload(data, FILE_INFO_SCHEMA, "file info")

        metadata = data.get("metadata") or {}
        dimensions = metadata.get("dimensions") or {}
        values: dict[str, Any] = {
            "hash": data["hash"],
            "status": status,
            "file_type": FileType.from_content_type(data["type"]),
            "mime_type": data["type"],
            "original": data.get("original"),
            "compression": data.get("compression"),
            "files": [RemoteFileVariant.from_dict(f) for f in data.get("files") or []],
            "blob_type": data.get("blob_type"),
            "title": data.get("title"),
            "description": data.get("description"),
            "width": dimensions.get("width"),
            "height": dimensions.get("height"),
            "duration": metadata.get("duration"),
            "has_audio": metadata.get("has_audio"),
            "thumbnail": _thumbnail_hash(data.get("extras") or []),
            "flags": data.get("flags"),
        }

        for f in fields(cls):
            since = f.metadata.get("since")
            if since is not None and api_version < since:
                values[f.name] = None

        return cls(**values)


def _thumbnail_hash(extras: list[dict]) -> str | None:
    """Hash of the first image extra, e.g. "/AbCd.jpg" -> "AbCd"."""
    for extra in extras:
        if str(extra.get("type", "")).startswith("image/") and extra.get("file"):
            return PurePath(extra["file"]).stem
    return None
