"""
Storage service for EFIHUB.

Base path: /storage
"""

from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from efihub.api.http_client import HttpClient
from efihub.api.response import Rule, expect_success, first_match, is_bool, is_string
from efihub.exceptions import RemoteCallError
from efihub.models.upload import FileSpec

logger = structlog.get_logger(__name__)

UPLOAD_ENDPOINT = "/storage/upload"
URL_ENDPOINT = "/storage/url"
EXISTS_ENDPOINT = "/storage/exists"
SIZE_ENDPOINT = "/storage/size"
DELETE_ENDPOINT = "/storage/delete"

UPLOAD_URL_RULES = (Rule("data.url", is_string), Rule("url", is_string))
URL_RULES = (Rule("data.url", is_string), Rule("url", is_string), Rule("data", is_string))
EXISTS_RULES = (Rule("exists"), Rule("data.exists"), Rule("data"))
SIZE_RULES = (
    Rule("data.size"),
    Rule("data.bytes"),
    Rule("size"),
    Rule("bytes"),
    Rule("data"),
)


def _to_int(value: Any) -> int | None:
    """Convert an int, float or numeric string to int; anything else to None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    return None


def _to_bool(value: Any) -> bool:
    """Truthiness with "0" counted as false, as the storage API sends it."""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


class StorageService:
    """Uploads, inspects and deletes files in EFIHUB storage."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def upload(
        self,
        file: FileSpec,
        path: str,
        fields: Mapping[str, Any] | None = None,
    ) -> str | None:
        """
        Upload a file to storage.

        Args:
            file: Path, record with ``path``/``contents``, or a list of those.
            path: Destination path or directory. End with "/" to let the
                server generate the filename.
            fields: Additional form fields. They override ``path`` on clash.

        Returns:
            URL of the uploaded file, or None on failure.

        Raises:
            FileNotReadableError: If a local path cannot be opened.
            InvalidFileSpecificationError: If ``file`` has an unknown shape.
        """
        response = self._http.post_multipart(
            UPLOAD_ENDPOINT,
            {"path": path, **(fields or {})},
            {"file": file},
        )
        try:
            body = expect_success(response, UPLOAD_ENDPOINT)
        except RemoteCallError as e:
            logger.warning("Storage upload failed", status=e.code, path=path)
            return None

        return first_match(body, UPLOAD_URL_RULES)

    def url(self, path: str) -> str | None:
        """
        Get the public URL of a stored file.

        Returns:
            URL, or None when not found.
        """
        response = self._http.get(URL_ENDPOINT, {"path": path})
        try:
            body = expect_success(response, URL_ENDPOINT)
        except RemoteCallError as e:
            logger.debug("Storage url lookup failed", status=e.code, path=path)
            return None

        return first_match(body, URL_RULES)

    def exists(self, path: str) -> bool:
        """Check whether a file exists on storage."""
        response = self._http.get(EXISTS_ENDPOINT, {"path": path})
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        try:
            body = expect_success(response, EXISTS_ENDPOINT)
        except RemoteCallError as e:
            logger.warning("Storage exists check failed", status=e.code, path=path)
            return False

        return _to_bool(first_match(body, EXISTS_RULES))

    def size(self, path: str) -> int | None:
        """
        Get a file's size in bytes.

        Returns:
            Size, or None if not found or the server sent no numeric size.
        """
        response = self._http.get(SIZE_ENDPOINT, {"path": path})
        try:
            body = expect_success(response, SIZE_ENDPOINT)
        except RemoteCallError as e:
            logger.debug("Storage size lookup failed", status=e.code, path=path)
            return None

        return _to_int(first_match(body, SIZE_RULES))

    def delete(self, path: str) -> bool:
        """
        Delete a file by path.

        Returns:
            True unless the call failed or the server answered
            ``"success": false``.
        """
        response = self._http.delete(DELETE_ENDPOINT, {"path": path})
        try:
            body = expect_success(response, DELETE_ENDPOINT)
        except RemoteCallError as e:
            logger.warning("Storage delete failed", status=e.code, path=path)
            return False

        success = first_match(body, [Rule("success", is_bool)])
        return True if success is None else success
