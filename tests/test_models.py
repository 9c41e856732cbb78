"""Tests for FileType, FileStatus and RemoteFile parsing.

WHY: Upload type detection and response parsing decide what the client
sends and what callers see. A wrong extension mapping sends the wrong
Content-Type; a lax parser hides a broken server response.

HOW: Pure unit tests against the model classes; no HTTP involved.

RULES:
- Payloads come from conftest fixtures (MediaCrush v2 shape)
- Version-gated fields are checked at both 1.0 and 2.0
"""

from __future__ import annotations

import pytest

from mediacrush_client.api.errors import ParseError, UnsupportedFileTypeError
from mediacrush_client.config import SUPPORTED_EXTENSIONS
from mediacrush_client.api.models import (
    _EXTENSION_MAP,
    FileStatus,
    FileType,
    RemoteFile,
    RemoteFileVariant,
    parse_json,
)


# ---------------------------------------------------------------------------
# FileType
# ---------------------------------------------------------------------------


class TestFileType:
    """Extension and MIME lookups."""

    def test_extension_table_matches_supported_extensions(self):
        assert set(_EXTENSION_MAP) == SUPPORTED_EXTENSIONS

    def test_every_supported_extension_resolves(self):
        for ext in SUPPORTED_EXTENSIONS:
            assert FileType.from_extension(ext) is not None

    @pytest.mark.parametrize(
        "ext, expected",
        [
            ("png", FileType.PNG),
            ("jpg", FileType.JPEG),
            ("jpeg", FileType.JPEG),
            ("gif", FileType.GIF),
            ("mp4", FileType.MP4),
            ("ogv", FileType.OGV),
            ("mp3", FileType.MP3),
            ("ogg", FileType.OGG),
        ],
    )
    def test_supported_extensions_resolve(self, ext, expected):
        assert FileType.from_extension(ext) is expected
        assert FileType.from_extension("." + ext.upper()) is expected

    @pytest.mark.parametrize("ext", ["webm", "txt", "svg", "", None])
    def test_unsupported_extensions_resolve_to_none(self, ext):
        assert FileType.from_extension(ext) is None

    def test_mime_strings(self):
        assert FileType.MP3.mime_type == "audio/mpeg"
        assert FileType.OGV.mime_type == "video/ogg"
        assert str(FileType.JPEG) == "image/jpeg"

    def test_from_content_type_accepts_jpg_alias_and_parameters(self):
        assert FileType.from_content_type("image/jpg") is FileType.JPEG
        assert FileType.from_content_type("Audio/Ogg; codecs=vorbis") is FileType.OGG
        assert FileType.from_content_type("image/svg+xml") is None

    def test_blob_type_and_extension(self):
        assert FileType.GIF.blob_type == "image"
        assert FileType.OGV.blob_type == "video"
        assert FileType.MP3.blob_type == "audio"
        assert FileType.JPEG.file_extension == ".jpg"

    def test_for_path(self):
        assert FileType.for_path("holiday/Beach.JPEG") is FileType.JPEG

    def test_for_path_rejects_unknown_suffix(self):
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            FileType.for_path("notes.txt")
        assert exc_info.value.status_code is None
        assert ".txt" in str(exc_info.value)

    def test_for_path_rejects_missing_suffix(self):
        with pytest.raises(UnsupportedFileTypeError):
            FileType.for_path("README")


# ---------------------------------------------------------------------------
# FileStatus
# ---------------------------------------------------------------------------


class TestFileStatus:
    """Server status strings map onto four client states."""

    @pytest.mark.parametrize(
        "wire, expected",
        [
            ("done", FileStatus.DONE),
            ("ready", FileStatus.DONE),
            ("pending", FileStatus.PROCESSING),
            ("processing", FileStatus.PROCESSING),
            ("error", FileStatus.ERROR),
            ("timeout", FileStatus.ERROR),
            ("unrecognised", FileStatus.ERROR),
            ("internal_error", FileStatus.ERROR),
            ("something-new", FileStatus.ERROR),
        ],
    )
    def test_from_wire(self, wire, expected):
        assert FileStatus.from_wire(wire) is expected

    def test_missing_status_is_processing(self):
        assert FileStatus.from_wire(None) is FileStatus.PROCESSING

    def test_only_processing_is_not_final(self):
        assert not FileStatus.PROCESSING.is_final
        assert FileStatus.DONE.is_final
        assert FileStatus.ERROR.is_final
        assert FileStatus.NOT_FOUND.is_final


# ---------------------------------------------------------------------------
# RemoteFile
# ---------------------------------------------------------------------------


class TestRemoteFile:
    """RemoteFile.from_dict() builds a complete object in one step."""

    def test_parses_v2_payload(self, gif_info):
        rf = RemoteFile.from_dict(gif_info, 2.0, status=FileStatus.DONE)

        assert rf.hash == "CPvuR5lRhmS0"
        assert rf.status is FileStatus.DONE
        assert rf.is_ready
        assert rf.file_type is FileType.GIF
        assert rf.mime_type == "image/gif"
        assert rf.original == "/CPvuR5lRhmS0.gif"
        assert rf.compression == pytest.approx(8.93)
        assert rf.files[0] == RemoteFileVariant(
            file="/CPvuR5lRhmS0.mp4",
            type="video/mp4",
            url="https://mediacru.sh/CPvuR5lRhmS0.mp4",
        )
        assert len(rf.files) == 3
        assert rf.blob_type == "video"
        assert rf.width == 500
        assert rf.height == 281
        assert rf.duration == pytest.approx(3.48)
        assert rf.has_audio is False
        assert rf.thumbnail == "thumbQ1w2E3r"
        assert rf.flags == {"autoplay": True, "loop": True, "mute": True}
        assert rf.title == "Cat"

    def test_v1_ignores_v2_fields(self, gif_info):
        rf = RemoteFile.from_dict(gif_info, 1.0)

        assert rf.hash == "CPvuR5lRhmS0"
        assert rf.file_type is FileType.GIF
        assert len(rf.files) == 3
        assert rf.blob_type is None
        assert rf.width is None
        assert rf.height is None
        assert rf.duration is None
        assert rf.thumbnail is None
        assert rf.flags is None
        assert rf.title is None

    def test_image_without_duration_or_thumbnail(self, png_info):
        rf = RemoteFile.from_dict(png_info, 2.0)

        assert rf.width == 64
        assert rf.duration is None
        assert rf.thumbnail is None
        assert rf.status is None
        assert not rf.is_ready

    def test_unmapped_mime_keeps_raw_type(self, png_info):
        png_info["type"] = "image/svg+xml"
        rf = RemoteFile.from_dict(png_info)
        assert rf.file_type is None
        assert rf.mime_type == "image/svg+xml"

    def test_minimal_payload(self):
        rf = RemoteFile.from_dict({"hash": "abc", "type": "audio/mpeg"})
        assert rf.file_type is FileType.MP3
        assert rf.files == []

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            "abc",
            {"type": "image/png"},
            {"hash": "", "type": "image/png"},
            {"hash": 12, "type": "image/png"},
            {"hash": "abc"},
            {"hash": "abc", "type": "image/png", "files": "nope"},
            {"hash": "abc", "type": "image/png", "files": [{"file": 5}]},
            {"hash": "abc", "type": "image/png", "extras": [{"type": "image/jpeg", "file": 5}]},
            {"hash": "abc", "type": "image/png", "extras": ["thumb.jpg"]},
            {"hash": "abc", "type": "image/png", "metadata": {"dimensions": [1, 2]}},
            {"hash": "abc", "type": "image/png", "metadata": {"dimensions": "64x64"}},
            {"hash": "abc", "type": "image/png", "metadata": {"dimensions": {"width": "wide"}}},
            {"hash": "abc", "type": "image/png", "metadata": {"duration": "3s"}},
            {"hash": "abc", "type": "image/png", "metadata": []},
            {"hash": "abc", "type": "image/png", "flags": {"loop": "yes"}},
        ],
    )
    def test_malformed_payload_raises_parse_error(self, payload):
        with pytest.raises(ParseError):
            RemoteFile.from_dict(payload)

    def test_not_found_marker(self):
        rf = RemoteFile.not_found("gone")
        assert rf.hash == "gone"
        assert rf.status is FileStatus.NOT_FOUND
        assert rf.file_type is None


class TestParseJson:
    def test_valid(self):
        assert parse_json('{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("text", ["", "{", "<html>502</html>"])
    def test_malformed(self, text):
        with pytest.raises(ParseError):
            parse_json(text)


class TestRemoteFileNullableFields:
    """Null nested values are accepted and read as absent."""

    def test_null_nested_values(self):
        rf = RemoteFile.from_dict(
            {
                "hash": "abc",
                "type": "video/mp4",
                "files": [{"file": None, "type": None, "url": None}],
                "extras": [{"file": None, "type": "image/jpeg"}],
                "metadata": {"dimensions": None, "duration": None},
            }
        )
        assert rf.files == [RemoteFileVariant(file="", type="", url=None)]
        assert rf.thumbnail is None
        assert rf.width is None
        assert rf.duration is None
