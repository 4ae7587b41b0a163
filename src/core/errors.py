"""Tally exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class TallyError(Exception):
    """Base exception for all Tally failures."""


class TallyConfigError(TallyError):
    """Raised for invalid runtime configuration."""


class TallyDependencyError(TallyError):
    """Raised when an optional runtime dependency is missing."""


class TallyReportSpecError(TallyError):
    """Raised for invalid or unsupported report-spec files."""


class TallyReportFormatError(TallyError):
    """Raised when a report is requested in an unknown output format."""


class SourceOpenError(TallyError):
    """Raised when a source descriptor cannot be opened as a line sequence."""

    def __init__(self, source_id: str, reason: str) -> None:
        super().__init__(
            f"Failed to open source {source_id}: {reason}. "
            "Provide an existing, readable file."
        )
        self.source_id = source_id
        self.reason = reason


class ParseError(TallyError):
    """Raised when one line does not decompose into a purchase record."""

    def __init__(
        self,
        source_id: str,
        line_number: int | None,
        field_name: str,
        value: str,
        raw_line: str,
    ) -> None:
        location = source_id if line_number is None else f"{source_id}:{line_number}"
        super().__init__(
            f"Failed to parse record at {location}: invalid {field_name} {value!r}. "
            "Expected 'identifier,category,amount' with a non-negative integer amount."
        )
        self.source_id = source_id
        self.line_number = line_number
        self.field_name = field_name
        self.value = value
        self.raw_line = raw_line


class InvalidSelectorError(TallyError):
    """Raised when a query names a sub-aggregate outside the closed set."""

    def __init__(self, selector: str, supported: tuple[str, ...]) -> None:
        super().__init__(
            f"Unsupported selector {selector!r}. Use one of: {', '.join(supported)}."
        )
        self.selector = selector


class EmptyAggregateError(TallyError):
    """Raised when a query targets a sub-aggregate with no entries."""

    def __init__(self, selector: str) -> None:
        super().__init__(
            f"Cannot pick the highest {selector} entry: no records were aggregated."
        )
        self.selector = selector


class AggregateFailure(TallyError):
    """Raised when any per-source pipeline fails during a report run."""

    def __init__(self, source_id: str, cause: SourceOpenError | ParseError) -> None:
        super().__init__(f"Report run aborted by source {source_id}: {cause}")
        self.source_id = source_id
        self.cause = cause


class FoldCancelledError(TallyError):
    """Raised inside a worker whose fold was stopped after a sibling failed."""
