"""Fold raw purchase lines into an aggregate.

Each fold owns its accumulator exclusively and hands back a fresh
immutable aggregate once the line sequence is exhausted.
"""

from __future__ import annotations

import threading
from typing import Iterable

from core.errors import FoldCancelledError
from core.logging_config import get_logger
from core.types import Aggregate, PurchaseRecord
from ingest.record_parser import is_blank_line, parse_record

_LOGGER = get_logger(__name__)


def fold_lines(
    lines: Iterable[str],
    source_id: str = "<memory>",
    cancel_event: threading.Event | None = None,
) -> Aggregate:
    """Parse and fold a line sequence in source order.

    Empty lines are skipped; line numbers stay physical and one-based.

    Args:
        lines: Raw lines from one line source.
        source_id: Source identity for error reporting.
        cancel_event: Optional event that stops the fold when set.

    Returns:
        Aggregate of every record in the sequence.

    Raises:
        ParseError: On the first malformed line.
        FoldCancelledError: If ``cancel_event`` is set before the end.
    """
    totals: dict[str, int] = {}
    counts: dict[str, int] = {}
    record_count = 0
    for line_number, raw_line in enumerate(lines, 1):
        if cancel_event is not None and cancel_event.is_set():
            raise FoldCancelledError(f"Fold of {source_id} cancelled at line {line_number}.")
        if is_blank_line(raw_line):
            continue
        record = parse_record(raw_line, source_id, line_number)
        _accumulate(totals, counts, record)
        record_count += 1
    _LOGGER.debug(
        "source_folded",
        source_id=source_id,
        record_count=record_count,
        user_count=len(totals),
        food_count=len(counts),
    )
    return Aggregate(totals=totals, counts=counts)


def fold_records(records: Iterable[PurchaseRecord]) -> Aggregate:
    """Fold already-parsed records into an aggregate."""
    totals: dict[str, int] = {}
    counts: dict[str, int] = {}
    for record in records:
        _accumulate(totals, counts, record)
    return Aggregate(totals=totals, counts=counts)


def _accumulate(totals: dict[str, int], counts: dict[str, int], record: PurchaseRecord) -> None:
    totals[record.identifier] = totals.get(record.identifier, 0) + record.amount
    counts[record.category] = counts.get(record.category, 0) + 1
