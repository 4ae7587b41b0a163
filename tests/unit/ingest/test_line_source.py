"""Unit tests for line sources."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from core.config import TallyConfig
from core.errors import ParseError, SourceOpenError
from ingest.line_source import FileLineSource, MemoryLineSource, resolve_source
from tests.fixture_paths import fixture_path


def test_file_line_source_streams_lines() -> None:
    """File source should yield raw lines lazily."""
    source = FileLineSource(fixture_path("purchases/orders.csv"))

    lines = source.open()

    assert next(lines) == "1,pizza,48\n"
    assert list(lines) == ["2,acai,45\n", "1,pizza,27\n"]


def test_file_line_source_fails_at_open_time(tmp_path: Path) -> None:
    """Missing files should fail when opened, not when first read."""
    source = FileLineSource(tmp_path / "missing.csv")

    with pytest.raises(SourceOpenError) as error_info:
        source.open()

    assert error_info.value.source_id == str(tmp_path / "missing.csv")


def test_file_line_source_rejects_directories(tmp_path: Path) -> None:
    """Directories are not line sources."""
    with pytest.raises(SourceOpenError):
        FileLineSource(tmp_path).open()


def test_file_line_source_keeps_crlf_terminators() -> None:
    """CRLF files should reach the parser with terminators intact."""
    lines = list(FileLineSource(fixture_path("purchases/orders_crlf.csv")).open())

    assert lines[1] == "2,açaí,45\r\n"


def test_memory_line_source_reopens_fresh_iterators() -> None:
    """Each open should start a new pass over the lines."""
    source = MemoryLineSource.from_lines("memory", ["1,pizza,48"])

    assert list(source.open()) == list(source.open()) == ["1,pizza,48"]


def test_resolve_source_applies_root_and_extension(tmp_path: Path) -> None:
    """Bare names should resolve against data root with default extension."""
    config = TallyConfig(data_root=tmp_path, source_extension=".csv")

    source = resolve_source("orders", config)

    assert isinstance(source, FileLineSource)
    assert source.path == tmp_path / "orders.csv"


def test_resolve_source_passes_line_sources_through(config: TallyConfig) -> None:
    """Line sources should be used as given."""
    source = MemoryLineSource.from_lines("memory", [])

    assert resolve_source(source, config) is source


def test_file_line_source_reports_exact_undecodable_line(tmp_path: Path) -> None:
    """Decode failures should name the line holding the bad bytes."""
    source_path = tmp_path / "orders.csv"
    source_path.write_bytes(b"1,pizza,48\n" * 99 + b"1,\xff\xfe,4\n")

    with pytest.raises(ParseError) as error_info:
        list(FileLineSource(source_path).open())

    error = error_info.value
    assert (error.line_number, error.field_name) == (100, "encoding")
    assert "\\xff\\xfe" in error.raw_line


def test_file_line_source_strips_byte_order_mark(tmp_path: Path) -> None:
    """A leading BOM should not leak into the first identifier."""
    source_path = tmp_path / "orders.csv"
    source_path.write_bytes(b"\xef\xbb\xbf1,pizza,48\n")

    assert list(FileLineSource(source_path).open()) == ["1,pizza,48\n"]


def test_file_line_source_rejects_unknown_encoding(tmp_path: Path) -> None:
    source_path = tmp_path / "orders.csv"
    source_path.write_text("1,pizza,48\n", encoding="utf-8")

    with pytest.raises(SourceOpenError):
        FileLineSource(source_path, encoding="no-such-codec").open()


class _UnreadableHandle(io.BytesIO):
    def readline(self, size: int | None = -1) -> bytes:
        raise OSError(5, "Input/output error")


def test_file_line_source_turns_read_errors_into_source_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """I/O failures while streaming should surface as SourceOpenError."""
    source_path = tmp_path / "orders.csv"
    source_path.write_text("1,pizza,48\n", encoding="utf-8")
    monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: _UnreadableHandle())

    lines = FileLineSource(source_path).open()

    with pytest.raises(SourceOpenError) as error_info:
        next(lines)

    assert error_info.value.source_id == str(source_path)
