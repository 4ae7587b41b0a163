"""Runtime configuration model for Tally.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_ENCODING,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SOURCE_EXTENSION,
)
from core.errors import TallyConfigError


@dataclass(frozen=True)
class TallyConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Directory that bare source names are resolved against.
        source_extension: Suffix appended to bare source names without one.
        max_workers: Upper bound of concurrent per-source pipelines.
        encoding: Text encoding used to read sources.
    """

    data_root: Path
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    max_workers: int = DEFAULT_MAX_WORKERS
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_env(cls) -> "TallyConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TallyConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("TALLY_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        source_extension = os.getenv("TALLY_SOURCE_EXTENSION", DEFAULT_SOURCE_EXTENSION)
        max_workers_value = os.getenv("TALLY_MAX_WORKERS", str(DEFAULT_MAX_WORKERS))
        encoding = os.getenv("TALLY_ENCODING", DEFAULT_ENCODING)
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            source_extension=_normalize_extension(source_extension),
            max_workers=parse_max_workers(max_workers_value),
            encoding=encoding,
        )


def parse_max_workers(raw_value: str) -> int:
    """Parse a worker-count value.

    Args:
        raw_value: Raw string from environment or CLI.

    Returns:
        Parsed positive worker count.

    Raises:
        TallyConfigError: If value is not a positive integer.
    """
    try:
        max_workers = int(raw_value)
    except ValueError as error:
        raise TallyConfigError(
            "Invalid TALLY_MAX_WORKERS value: "
            f"expected integer, got '{raw_value}'. "
            "Set TALLY_MAX_WORKERS to a positive number."
        ) from error
    if max_workers < 1:
        raise TallyConfigError(
            f"Invalid TALLY_MAX_WORKERS value {max_workers}: at least one worker is required."
        )
    return max_workers


def _normalize_extension(raw_value: str) -> str:
    extension = raw_value.strip()
    if extension and not extension.startswith("."):
        return f".{extension}"
    return extension
