"""Line sources for purchase ingestion.

This module turns source descriptors into lazy sequences of raw lines.
Files are opened eagerly so missing sources fail before the first read,
while lines are streamed and decoded one at a time to keep memory constant.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, Protocol, Union, runtime_checkable

from core.config import TallyConfig
from core.constants import DEFAULT_ENCODING, LINE_TERMINATORS
from core.errors import ParseError, SourceOpenError


@runtime_checkable
class LineSource(Protocol):
    """One input origin that yields raw text lines."""

    source_id: str

    def open(self) -> Iterator[str]:
        """Open the origin and return a fresh, single-pass line iterator."""
        ...


SourceDescriptor = Union[LineSource, Path, str]


@dataclass(frozen=True)
class FileLineSource:
    """Line source backed by a local text file.

    Attributes:
        path: File to read.
        encoding: Text encoding of the file.
    """

    path: Path
    encoding: str = DEFAULT_ENCODING

    @property
    def source_id(self) -> str:
        return str(self.path)

    def open(self) -> Iterator[str]:
        """Open the file and stream its lines.

        Returns:
            Lazy iterator over raw lines, terminators included.

        Raises:
            SourceOpenError: If the file is missing or unreadable.
        """
        if self.path.is_dir():
            raise SourceOpenError(self.source_id, "path is a directory")
        try:
            codecs.lookup(self.encoding)
        except LookupError as error:
            raise SourceOpenError(self.source_id, f"unknown encoding {self.encoding!r}") from error
        try:
            handle = self.path.open("rb")
        except FileNotFoundError as error:
            raise SourceOpenError(self.source_id, "path does not exist") from error
        except OSError as error:
            raise SourceOpenError(self.source_id, error.strerror or str(error)) from error
        return _stream_lines(handle, self.source_id, self.encoding)


@dataclass(frozen=True)
class MemoryLineSource:
    """Line source over an in-memory sequence of lines."""

    source_id: str
    lines: tuple[str, ...]

    @classmethod
    def from_lines(cls, source_id: str, lines: Iterable[str]) -> "MemoryLineSource":
        return cls(source_id=source_id, lines=tuple(lines))

    def open(self) -> Iterator[str]:
        return iter(self.lines)


def resolve_source(descriptor: SourceDescriptor, config: TallyConfig) -> LineSource:
    """Resolve a descriptor into a line source.

    Args:
        descriptor: Line source, file path, or bare source name.
        config: Runtime config with data root and default extension.

    Returns:
        Line source ready to open.
    """
    if isinstance(descriptor, LineSource):
        return descriptor
    return FileLineSource(path=_resolve_path(descriptor, config), encoding=config.encoding)


def _resolve_path(descriptor: Path | str, config: TallyConfig) -> Path:
    source_path = Path(descriptor).expanduser()
    if source_path.name and not source_path.suffix and config.source_extension:
        source_path = source_path.with_suffix(config.source_extension)
    if source_path.is_absolute():
        return source_path
    return config.data_root / source_path


def _stream_lines(handle: IO[bytes], source_id: str, encoding: str) -> Iterator[str]:
    with handle:
        line_number = 0
        while True:
            try:
                raw_line = handle.readline()
            except OSError as error:
                raise SourceOpenError(
                    source_id, f"read failed after line {line_number}: {error}"
                ) from error
            if not raw_line:
                return
            line_number += 1
            yield _decode_line(raw_line, source_id, line_number, encoding)


def _decode_line(raw_line: bytes, source_id: str, line_number: int, encoding: str) -> str:
    try:
        return raw_line.decode(encoding)
    except UnicodeDecodeError as error:
        readable_line = raw_line.decode(encoding, errors="backslashreplace")
        raise ParseError(
            source_id,
            line_number,
            "encoding",
            readable_line.rstrip(LINE_TERMINATORS),
            readable_line,
        ) from error
