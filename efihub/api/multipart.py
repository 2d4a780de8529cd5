"""
File specification normalizer for multipart uploads.

Turns the loose shapes callers pass as upload files (a path, a record with a
path or raw contents, or a list of those) into uniform ``FilePart`` tuples.
"""

import os
from collections.abc import Mapping
from contextlib import ExitStack
from typing import Any

from efihub.exceptions import FileNotReadableError, InvalidFileSpecificationError
from efihub.models.upload import FileContents, FilePart, FilePath, FileSpec


def resolve_files(files: Mapping[str, FileSpec], stack: ExitStack) -> list[FilePart]:
    """
    Resolve every ``{field: spec}`` entry into file parts.

    Args:
        files: Field name to file specification.
        stack: Receives every opened file so the caller controls closing.

    Returns:
        Parts in field order; list specs expand in place.
    """
    parts: list[FilePart] = []
    for field_name, spec in files.items():
        parts.extend(resolve_file_spec(field_name, spec, stack))
    return parts


def resolve_file_spec(field_name: str, spec: FileSpec, stack: ExitStack) -> list[FilePart]:
    """
    Resolve one field's file specification.

    A record carrying both ``path`` and ``contents`` is resolved by ``path``.

    Args:
        field_name: Multipart field the parts are sent under.
        spec: Path, record, or list of either.
        stack: Receives every opened file.

    Returns:
        One part per file; several when ``spec`` is a list.

    Raises:
        FileNotReadableError: If a path cannot be opened for reading.
        InvalidFileSpecificationError: If ``spec`` has an unknown shape or is
            an empty list.
    """
    if isinstance(spec, (list, tuple)):
        if not spec:
            msg = "File list is empty"
            raise InvalidFileSpecificationError(msg, field=field_name)
        parts = []
        for entry in spec:
            if isinstance(entry, (list, tuple)):
                msg = "Nested file lists are not supported"
                raise InvalidFileSpecificationError(msg, field=field_name)
            parts.extend(resolve_file_spec(field_name, entry, stack))
        return parts

    return [_resolve_single(field_name, _as_record(field_name, spec), stack)]


def _as_record(field_name: str, spec: Any) -> FilePath | FileContents:
    if isinstance(spec, (FilePath, FileContents)):
        return spec

    if isinstance(spec, (str, os.PathLike)):
        return FilePath(path=spec)

    if isinstance(spec, Mapping):
        filename = spec.get("filename")
        headers = spec.get("headers") or {}
        if filename is not None and not isinstance(filename, str):
            msg = "File spec 'filename' must be a string"
            raise InvalidFileSpecificationError(msg, field=field_name)
        if not isinstance(headers, Mapping):
            msg = "File spec 'headers' must be a mapping"
            raise InvalidFileSpecificationError(msg, field=field_name)

        if "path" in spec:
            path = spec["path"]
            if not isinstance(path, (str, os.PathLike)):
                msg = "File spec 'path' must be a string or path-like"
                raise InvalidFileSpecificationError(msg, field=field_name)
            return FilePath(path=path, filename=filename, headers=headers)

        if "contents" in spec:
            contents = spec["contents"]
            if not isinstance(contents, (bytes, str)):
                msg = "File spec 'contents' must be bytes or str"
                raise InvalidFileSpecificationError(msg, field=field_name)
            return FileContents(contents=contents, filename=filename, headers=headers)

    msg = f"Unrecognized file specification of type {type(spec).__name__}"
    raise InvalidFileSpecificationError(msg, field=field_name)


def _resolve_single(
    field_name: str, record: FilePath | FileContents, stack: ExitStack
) -> FilePart:
    headers = dict(record.headers)

    if isinstance(record, FileContents):
        contents = record.contents
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        return FilePart(field_name, contents, record.filename or field_name, headers)

    path = os.fspath(record.path)
    try:
        handle = stack.enter_context(open(path, "rb"))  # noqa: SIM115
    except OSError as e:
        msg = f"Cannot open file for upload: {e.strerror or e}"
        raise FileNotReadableError(msg, path=path) from e

    filename = record.filename or os.path.basename(path)
    return FilePart(field_name, handle, filename, headers)
