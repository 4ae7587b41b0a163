"""Core constants used across Tally modules.

This module centralizes record-format and runtime defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".")
DEFAULT_SOURCE_EXTENSION = ".csv"
DEFAULT_ENCODING = "utf-8-sig"
DEFAULT_MAX_WORKERS = 4
FIELD_DELIMITER = ","
RECORD_FIELD_NAMES = ("identifier", "category", "amount")
LINE_TERMINATORS = "\r\n"
REPORT_OPTION_ALL = "all"
DEFAULT_REPORT_OPTION = REPORT_OPTION_ALL
SUPPORTED_OUTPUT_FORMATS = ("text", "json")
DEFAULT_OUTPUT_FORMAT = "text"
REPORT_SPEC_VERSION = 1
DEFAULT_LOG_LEVEL = "info"
