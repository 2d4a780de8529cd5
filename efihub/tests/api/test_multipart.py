from contextlib import ExitStack
from pathlib import Path

import pytest

from efihub.api.multipart import resolve_file_spec, resolve_files
from efihub.exceptions import FileNotReadableError, InvalidFileSpecificationError
from efihub.models.upload import FileContents, FilePath


@pytest.fixture
def pdf_a(tmp_path: Path) -> Path:
    path = tmp_path / "a.pdf"
    path.write_bytes(b"%PDF-a")
    return path


@pytest.fixture
def pdf_b(tmp_path: Path) -> Path:
    path = tmp_path / "b.pdf"
    path.write_bytes(b"%PDF-b")
    return path


def test_plain_path_opens_file_with_base_name(pdf_a: Path) -> None:
    with ExitStack() as stack:
        [part] = resolve_file_spec("file", str(pdf_a), stack)

        assert part.field_name == "file"
        assert part.filename == "a.pdf"
        assert part.headers == {}
        assert part.content.read() == b"%PDF-a"

    assert part.content.closed


def test_path_like_is_treated_as_path(pdf_a: Path) -> None:
    with ExitStack() as stack:
        [part] = resolve_file_spec("file", pdf_a, stack)

        assert part.filename == "a.pdf"


def test_missing_path_raises_file_not_readable(tmp_path: Path) -> None:
    missing = tmp_path / "a.pdf"

    with ExitStack() as stack, pytest.raises(FileNotReadableError) as exc_info:
        resolve_file_spec("file", str(missing), stack)

    assert exc_info.value.path == str(missing)


def test_directory_path_raises_file_not_readable(tmp_path: Path) -> None:
    with ExitStack() as stack, pytest.raises(FileNotReadableError):
        resolve_file_spec("file", str(tmp_path), stack)


def test_path_record_overrides_filename_and_headers(pdf_a: Path) -> None:
    spec = {"path": str(pdf_a), "filename": "invoice.pdf", "headers": {"X-Tag": "1"}}

    with ExitStack() as stack:
        [part] = resolve_file_spec("file", spec, stack)

        assert part.filename == "invoice.pdf"
        assert part.headers == {"X-Tag": "1"}
        assert part.content.read() == b"%PDF-a"


def test_contents_record_defaults_filename_to_field_name() -> None:
    with ExitStack() as stack:
        [part] = resolve_file_spec("attachment", {"contents": b"raw bytes"}, stack)

    assert part == ("attachment", b"raw bytes", "attachment", {})


def test_contents_record_encodes_text() -> None:
    with ExitStack() as stack:
        [part] = resolve_file_spec(
            "file", {"contents": "héllo", "filename": "note.txt"}, stack
        )

    assert part.content == "héllo".encode()
    assert part.filename == "note.txt"


def test_record_with_path_and_contents_prefers_path(pdf_a: Path) -> None:
    spec = {"path": str(pdf_a), "contents": b"ignored"}

    with ExitStack() as stack:
        [part] = resolve_file_spec("file", spec, stack)

        assert part.content.read() == b"%PDF-a"


def test_typed_records_are_accepted(pdf_a: Path) -> None:
    with ExitStack() as stack:
        parts = resolve_file_spec(
            "file",
            [FilePath(path=pdf_a, filename="one.pdf"), FileContents(contents=b"two")],
            stack,
        )

        assert [p.filename for p in parts] == ["one.pdf", "file"]


def test_list_yields_one_part_per_entry_under_same_field(pdf_a: Path, pdf_b: Path) -> None:
    with ExitStack() as stack:
        parts = resolve_file_spec("field", [str(pdf_a), str(pdf_b)], stack)

        assert [p.field_name for p in parts] == ["field", "field"]
        assert [p.filename for p in parts] == ["a.pdf", "b.pdf"]


def test_list_with_missing_entry_closes_already_opened_files(
    pdf_a: Path, tmp_path: Path
) -> None:
    opened = []
    stack = ExitStack()
    enter_context = stack.enter_context

    def recording_enter(cm):
        handle = enter_context(cm)
        opened.append(handle)
        return handle

    stack.enter_context = recording_enter

    with pytest.raises(FileNotReadableError), stack:
        resolve_file_spec("field", [str(pdf_a), str(tmp_path / "missing.pdf")], stack)

    assert len(opened) == 1
    assert opened[0].closed


@pytest.mark.parametrize(
    "spec",
    [
        42,
        None,
        b"bytes are not a path",
        {"filename": "x.pdf"},
        {"path": 123},
        {"contents": 123},
        {"contents": b"x", "filename": 5},
        {"contents": b"x", "headers": "X-Tag: 1"},
        [["nested.pdf"]],
        [],
        (),
    ],
)
def test_unrecognized_spec_raises_invalid_file_specification(spec: object) -> None:
    with ExitStack() as stack, pytest.raises(InvalidFileSpecificationError) as exc_info:
        resolve_file_spec("file", spec, stack)

    assert exc_info.value.field == "file"


def test_resolve_files_keeps_field_order(pdf_a: Path) -> None:
    with ExitStack() as stack:
        parts = resolve_files({"first": str(pdf_a), "second": {"contents": b"x"}}, stack)

        assert [p.field_name for p in parts] == ["first", "second"]
