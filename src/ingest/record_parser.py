"""Purchase record parsing.

This module converts one raw ``identifier,category,amount`` line into a
typed record. Parsing is pure so it can run on lines from any source.
"""

from __future__ import annotations

import re

from core.constants import FIELD_DELIMITER, LINE_TERMINATORS, RECORD_FIELD_NAMES
from core.errors import ParseError
from core.types import PurchaseRecord

_AMOUNT_PATTERN = re.compile(r"[0-9]+")


def parse_record(
    raw_line: str,
    source_id: str = "<memory>",
    line_number: int | None = None,
) -> PurchaseRecord:
    """Parse one purchase line.

    Args:
        raw_line: Line text, optionally ending with a line terminator.
        source_id: Source identity for error reporting.
        line_number: One-based line number for error reporting.

    Returns:
        Parsed purchase record.

    Raises:
        ParseError: If the line is not three fields or the amount is invalid.
    """
    line = raw_line.rstrip(LINE_TERMINATORS)
    fields = line.split(FIELD_DELIMITER)
    if len(fields) != len(RECORD_FIELD_NAMES):
        raise ParseError(source_id, line_number, "record", line, raw_line)
    identifier, category, amount_text = fields
    if not identifier:
        raise ParseError(source_id, line_number, "identifier", identifier, raw_line)
    if not category:
        raise ParseError(source_id, line_number, "category", category, raw_line)
    if _AMOUNT_PATTERN.fullmatch(amount_text) is None:
        raise ParseError(source_id, line_number, "amount", amount_text, raw_line)
    return PurchaseRecord(identifier=identifier, category=category, amount=int(amount_text))


def is_blank_line(raw_line: str) -> bool:
    """Return whether a line is empty once its terminator is removed."""
    return not raw_line.rstrip(LINE_TERMINATORS)
