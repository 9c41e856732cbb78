"""Blocking client for the MediaCrush media-hosting API.

WHY: Applications need to upload images, video and audio to MediaCrush,
find out when conversion has finished, look up file metadata, and delete
what they uploaded. This module hides URLs, multipart framing and the
server's two ways of reporting errors behind one client class.

HOW: MediaCrushClient holds an immutable ClientConfig and a Transport.
Each public method validates its arguments, issues one or two blocking
requests (get_file needs a third while conversion is still running),
and turns the responses into a RemoteFile, a hash, a bool, or one of
the exceptions in api.errors:
  exists → get_file / get_file_status, get_files
  upload_file → upload_stream → upload_bytes, upload_url
  delete, wait_until_done

RULES:
- Arguments are validated before any network I/O
- Uploads return as soon as the server accepts the file; poll with
  get_file_status or wait_until_done before using it
- A 200 upload response with an "error" field is a failure; the field is
  read as a status code and mapped like an HTTP status
- exists() turns 404 into False; every other failure propagates
- Nothing is retried and nothing is cached between calls
- A client holds no mutable state; build a new one to talk to another
  server or schema version
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, BinaryIO

import httpx

from mediacrush_client.api.errors import (
    InvalidArgumentError,
    InvalidUrlError,
    NotFoundError,
    OwnershipMismatchError,
    ParseError,
    ProcessingTimeoutError,
    RateLimitError,
    RemoteNotFoundError,
    UnknownServerError,
    UnsupportedFileTypeError,
    UploadConflictError,
    UploadRejectedError,
)
from mediacrush_client.api.models import (
    UPLOAD_RESPONSE_SCHEMA,
    FileStatus,
    FileType,
    RemoteFile,
    parse_json,
    validate_payload,
)
from mediacrush_client.api.transport import Transport, TransportResponse
from mediacrush_client.config import ClientConfig
from mediacrush_client.core.multipart import build_upload_body, build_upload_headers
from mediacrush_client.core.validation import require_all_non_null, require_non_null

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Status code → exception tables
# ---------------------------------------------------------------------------

FILE_UPLOAD_ERRORS: dict[int, type[UploadRejectedError]] = {
    409: UploadConflictError,
    420: RateLimitError,
    415: UnsupportedFileTypeError,
}

URL_UPLOAD_ERRORS: dict[int, type[UploadRejectedError]] = {
    400: InvalidUrlError,
    404: RemoteNotFoundError,
    **FILE_UPLOAD_ERRORS,
}

DELETE_ERRORS: dict[int, type[UploadRejectedError]] = {
    404: NotFoundError,
    401: OwnershipMismatchError,
}

_POLL_INTERVAL_S = 2.0
_POLL_TIMEOUT_S = 10 * 60


def _rejection(code: int | None, table: Mapping[int, type[UploadRejectedError]]) -> UploadRejectedError:
    if code is None:
        return UnknownServerError(None)
    return table.get(code, UnknownServerError)(code)


class MediaCrushClient:
    """Client for one MediaCrush server.

    WHY: Replaces global "current server URL" and "current API version"
    settings with a value every call can see.

    HOW: Built from a ClientConfig (defaults to the public server and the
    newest schema version) and a Transport (defaults to a real httpx
    transport with the configured User-Agent).

    RULES:
    - Use as: client = MediaCrushClient(); client.upload_file("cat.gif")
    - config.api_url always ends with "/" and prefixes every endpoint
    - config.api_version only changes which fields RemoteFile parsing reads
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport = transport or Transport(user_agent=self._config.user_agent)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_url(self) -> str:
        return self._config.api_url

    @property
    def api_version(self) -> float:
        return self._config.api_version

    def _url(self, path: str) -> str:
        return self._config.api_url + path

    def _get_json(self, path: str) -> Any:
        """GET a JSON endpoint; 404 → NotFoundError, other non-200 → UnknownServerError."""
        resp = self._transport.execute("GET", self._url(path))
        if resp.status_code != 200:
            raise _rejection(resp.status_code, {404: NotFoundError})
        return parse_json(resp.text)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def exists(self, hash: str) -> bool:
        """Return whether a file with this hash exists on the server.

        Raises:
            InvalidArgumentError: hash is empty.
            TransportError: the request could not be sent.
            UnknownServerError: any status other than 2xx or 404.
        """
        require_non_null(hash, "hash")
        resp = self._transport.execute("HEAD", self._url(f"{hash}/exists"))
        if resp.is_success:
            return True
        if resp.status_code == 404:
            return False
        raise UnknownServerError(resp.status_code)

    def get_file(self, hash: str) -> RemoteFile | None:
        """Return the file's metadata and processing status, or None if absent.

        WHY: Metadata and processing status live on different endpoints;
        callers want both in one object.

        HOW: Checks existence, then reads the status endpoint, which embeds
        the file object under the hash key. While a file is still being
        processed the embedded object may be missing, in which case the
        plain info endpoint is read as well.

        RULES:
        - Returns None when exists() is False or the file disappears mid-call
        - The returned status always comes from the status endpoint

        Raises:
            InvalidArgumentError: hash is empty.
            TransportError: a request could not be sent.
            ParseError: a response was not the expected JSON.
            UnknownServerError: an unexpected HTTP status.
        """
        require_non_null(hash, "hash")
        if not self.exists(hash):
            return None
        try:
            return self._fetch_file(hash)
        except NotFoundError:
            return None

    def get_file_status(self, hash: str) -> RemoteFile:
        """Like get_file, but an unknown hash yields a NOT_FOUND RemoteFile."""
        file = self.get_file(hash)
        if file is None:
            return RemoteFile.not_found(hash)
        return file

    def _fetch_file(self, hash: str) -> RemoteFile:
        payload = self._get_json(f"{hash}/status")
        if not isinstance(payload, dict):
            raise ParseError(f"Unexpected status response for {hash}: {payload!r}")

        raw_status = payload.get("status")
        if raw_status is not None and not isinstance(raw_status, str):
            raise ParseError(f"Unexpected status value for {hash}: {raw_status!r}")
        status = FileStatus.from_wire(raw_status)

        info = payload.get(hash)
        if not isinstance(info, dict):
            info = self._get_json(hash)
        return RemoteFile.from_dict(info, self.api_version, status=status)

    def get_files(self, *hashes: str | Iterable[str]) -> list[RemoteFile | None]:
        """Look up several files in one request.

        HOW: GET info?list=h1,h2,... and pick each hash out of the returned
        object. Entries that are missing, null or malformed become None, so
        one bad hash does not fail the whole lookup.

        RULES:
        - Accepts hashes as separate arguments or as one list/tuple
        - Result length equals the number of hashes and keeps their order
        - status is None on every entry; this endpoint does not report it

        Raises:
            InvalidArgumentError: no hashes, or an empty or non-string hash.
            NotFoundError: the server answered 404 for the whole lookup.
            ParseError: the body was not a JSON object.
        """
        if len(hashes) == 1 and isinstance(hashes[0], (list, tuple)):
            hashes = tuple(hashes[0])
        require_all_non_null(hashes, "hashes", member_type=str)
        payload = self._get_json("info?list=" + ",".join(hashes))
        if not isinstance(payload, dict):
            raise ParseError(f"Unexpected info response: {payload!r}")

        results: list[RemoteFile | None] = []
        for h in hashes:
            entry = payload.get(h)
            if entry is None:
                results.append(None)
                continue
            try:
                results.append(RemoteFile.from_dict(entry, self.api_version, status=None))
            except ParseError:
                logger.debug("Skipping malformed info entry for %s", h)
                results.append(None)
        return results

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    def upload_file(self, path: str | Path) -> str:
        """Upload a local file and return its hash.

        RULES:
        - The type comes from the file suffix; png, jpg, jpeg, gif, mp4,
          ogv, mp3 and ogg are accepted
        - An unknown suffix fails before anything is sent

        Raises:
            InvalidArgumentError: path is empty.
            FileNotFoundError: path does not exist.
            IsADirectoryError: path is a directory.
            UnsupportedFileTypeError: the suffix is not accepted.
            UploadRejectedError: see upload_bytes.
        """
        require_non_null(path, "path")
        path = Path(path)
        if not path.name:
            raise InvalidArgumentError("path", f"Path has no file name: {str(path)!r}")
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if path.is_dir():
            raise IsADirectoryError(f"Path is a directory: {path}")

        file_type = FileType.for_path(path)
        with open(path, "rb") as f:
            return self.upload_stream(f, file_type, path.name)

    def upload_stream(self, stream: BinaryIO, file_type: FileType, filename: str) -> str:
        """Read a binary stream to the end and upload it as filename."""
        require_non_null(stream, "stream")
        return self.upload_bytes(stream.read(), file_type, filename)

    def upload_bytes(self, data: bytes, file_type: FileType, filename: str) -> str:
        """Upload raw bytes and return the new file's hash.

        HOW: Frames data as one multipart "file" part with the fixed
        boundary and POSTs it to upload/file.

        Args:
            data: File content.
            file_type: Media format, sets the part's Content-Type.
            filename: Name sent to the server, including the extension.

        Returns:
            The hash of the file; conversion may still be running.

        Raises:
            InvalidArgumentError: a required argument is empty.
            UploadConflictError: 409, already uploaded.
            RateLimitError: 420, too many uploads.
            UnsupportedFileTypeError: 415, format refused.
            UnknownServerError: any other error code.
            ParseError: 200 without a usable body.
        """
        require_non_null(data, "data")
        require_non_null(file_type, "file_type")
        require_non_null(filename, "filename")

        body = build_upload_body(data, filename, FileType(file_type).mime_type)
        resp = self._transport.execute(
            "POST",
            self._url("upload/file"),
            headers=build_upload_headers(body),
            content=body,
        )
        return _parse_upload_response(resp, FILE_UPLOAD_ERRORS)

    def upload_url(self, url: str | httpx.URL) -> str:
        """Have the server fetch a remote file and return its hash.

        Raises:
            InvalidArgumentError: url is empty.
            InvalidUrlError: 400, the server refused the URL.
            RemoteNotFoundError: 404, nothing at the URL.
            UploadConflictError, RateLimitError, UnsupportedFileTypeError,
            UnknownServerError: as for upload_bytes.
        """
        require_non_null(url, "url")
        url = str(url)
        require_non_null(url, "url")
        resp = self._transport.execute(
            "POST",
            self._url("upload/url"),
            data={"url": url},
        )
        return _parse_upload_response(resp, URL_UPLOAD_ERRORS)

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def delete(self, file: str | RemoteFile) -> None:
        """Delete a file. Only the uploading IP address may do this.

        Raises:
            InvalidArgumentError: hash is empty.
            NotFoundError: 404, no such hash.
            OwnershipMismatchError: 401, caller's IP is not the uploader's.
            UnknownServerError: any other non-200 status.
        """
        require_non_null(file, "file")
        hash = file.hash if isinstance(file, RemoteFile) else file
        require_non_null(hash, "hash")

        resp = self._transport.execute("DELETE", self._url(f"files/{hash}"))
        if resp.status_code != 200:
            raise _rejection(resp.status_code, DELETE_ERRORS)

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def wait_until_done(
        self,
        hash: str,
        interval: float = _POLL_INTERVAL_S,
        timeout: float = _POLL_TIMEOUT_S,
    ) -> RemoteFile:
        """Poll get_file_status until the file leaves PROCESSING.

        RULES:
        - Returns on DONE, ERROR or NOT_FOUND; check .status
        - Request failures propagate immediately, they are not retried
        - Raises ProcessingTimeoutError once timeout seconds have passed
        """
        require_non_null(hash, "hash")
        start_time = time.monotonic()

        while True:
            file = self.get_file_status(hash)
            if file.status is not None and file.status.is_final:
                return file

            elapsed = time.monotonic() - start_time
            if elapsed + interval > timeout:
                raise ProcessingTimeoutError(
                    f"File {hash} still processing after {elapsed:.0f}s "
                    f"(limit: {timeout:.0f}s)"
                )
            time.sleep(interval)


def _parse_upload_response(
    resp: TransportResponse,
    table: Mapping[int, type[UploadRejectedError]],
) -> str:
    """Return the uploaded hash or raise the mapped rejection.

    RULES:
    - Non-200 status → mapped from the HTTP status
    - 200 with an "error" key → int(error) mapped through the same table;
      a non-numeric error → UnknownServerError
    - 200 without "error" must carry a non-empty string hash
    """
    if resp.status_code != 200:
        raise _rejection(resp.status_code, table)

    payload = parse_json(resp.text)
    validate_payload(payload, UPLOAD_RESPONSE_SCHEMA, "upload response")

    if "error" in payload:
        error = payload["error"]
        try:
            code = int(error)
        except (TypeError, ValueError):
            raise UnknownServerError(
                None, f"The server responded with an unknown error ({error})"
            ) from None
        raise _rejection(code, table)

    file_hash = payload.get("hash")
    if not file_hash:
        raise ParseError(f"Upload response has no hash: {resp.text!r}")
    return file_hash
