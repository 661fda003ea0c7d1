from __future__ import annotations

import io
from pathlib import Path

import pytest

from mdstyle.documents import read_document, read_stream, resolve_document, size_limit


def test_size_limit_default(monkeypatch):
    monkeypatch.delenv("MDSTYLE_MAX_FILE_SIZE", raising=False)

    assert size_limit(default=123) == 123


def test_size_limit_from_environment(monkeypatch):
    monkeypatch.setenv("MDSTYLE_MAX_FILE_SIZE", "2048")

    assert size_limit() == 2048


def test_blank_size_limit_uses_default(monkeypatch):
    monkeypatch.setenv("MDSTYLE_MAX_FILE_SIZE", "  ")

    assert size_limit(default=7) == 7


@pytest.mark.parametrize("value", ["invalid", "0", "-5", "1.5"])
def test_size_limit_rejects_non_positive_integers(monkeypatch, value: str):
    monkeypatch.setenv("MDSTYLE_MAX_FILE_SIZE", value)

    with pytest.raises(ValueError, match="must be a positive integer"):
        size_limit()


def test_resolve_document_missing_file(tmp_path: Path):
    with pytest.raises(ValueError, match="does not exist"):
        resolve_document(str(tmp_path / "missing.md"))


def test_resolve_document_rejects_directories(tmp_path: Path):
    directory = tmp_path / "docs.md"
    directory.mkdir()

    with pytest.raises(ValueError, match="not a regular file"):
        resolve_document(str(directory))


def test_resolve_document_rejects_other_extensions(tmp_path: Path):
    target = tmp_path / "image.png"
    target.write_bytes(b"")

    with pytest.raises(ValueError, match="not a Markdown file"):
        resolve_document(str(target))


def test_resolve_document_returns_absolute_path(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "README.MD").write_text("x", encoding="utf-8")

    assert resolve_document("README.MD") == (tmp_path / "README.MD").resolve()


def test_read_stream_translates_line_endings():
    assert read_stream(io.BytesIO(b"a\r\nb\rc\n"), 1024) == "a\nb\nc\n"


def test_read_stream_accepts_exactly_the_limit():
    assert read_stream(io.BytesIO(b"12345"), 5) == "12345"


def test_read_stream_enforces_limit():
    with pytest.raises(IOError, match="<stdin> exceeds the maximum allowed size of 5 bytes"):
        read_stream(io.BytesIO(b"123456"), 5)


def test_read_stream_rejects_invalid_utf8():
    with pytest.raises(IOError, match="Invalid UTF-8 sequence in <stdin>"):
        read_stream(io.BytesIO(b"\xff\xfe"), 1024)


def test_read_document_enforces_size(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("0123456789", encoding="utf-8")

    with pytest.raises(IOError, match="exceeds the maximum allowed size"):
        read_document(target, 5)


def test_read_document_reports_unreadable_files(tmp_path: Path):
    with pytest.raises(IOError, match="Cannot open"):
        read_document(tmp_path / "missing.md", 1024)


def test_read_document_keeps_nul_bytes(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_bytes(b"a\x00\nb")

    assert read_document(target, 1024) == "a\x00\nb"
