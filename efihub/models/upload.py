"""
Upload-related models.
"""

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, Any, NamedTuple, TypeAlias


@dataclass(frozen=True, kw_only=True)
class FilePath:
    """
    A local file to upload.

    Attributes:
        path: Filesystem path, opened in binary mode at request time.
        filename: Name sent to the server. Defaults to the path's base name.
        headers: Extra headers for this part.
    """

    path: str | os.PathLike[str]
    filename: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class FileContents:
    """
    In-memory content to upload.

    Attributes:
        contents: Raw bytes, or text encoded as UTF-8.
        filename: Name sent to the server. Defaults to the field name.
        headers: Extra headers for this part.
    """

    contents: bytes | str
    filename: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)


FileRecord: TypeAlias = FilePath | FileContents | Mapping[str, Any]
SingleFileSpec: TypeAlias = str | os.PathLike[str] | FileRecord
FileSpec: TypeAlias = SingleFileSpec | Sequence[SingleFileSpec]


class FilePart(NamedTuple):
    """One resolved multipart file part."""

    field_name: str
    content: IO[bytes] | bytes
    filename: str
    headers: dict[str, str]
