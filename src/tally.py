"""Public SDK surface for Tally.

This module provides a stable import path for report users.
It re-exports the report operations and typed models.
"""

from __future__ import annotations

from typing import Sequence

from aggregate.merge import merge_aggregates, reduce_aggregates
from aggregate.query import fetch_higher_cost
from core.config import TallyConfig
from core.errors import (
    AggregateFailure,
    EmptyAggregateError,
    InvalidSelectorError,
    ParseError,
    SourceOpenError,
    TallyError,
)
from core.types import Aggregate, MaxEntry, PurchaseRecord, Selector
from ingest import orchestrator
from ingest.line_source import FileLineSource, LineSource, MemoryLineSource, SourceDescriptor
from report.formatter import render_report

__all__ = [
    "Aggregate",
    "AggregateFailure",
    "EmptyAggregateError",
    "FileLineSource",
    "InvalidSelectorError",
    "LineSource",
    "MaxEntry",
    "MemoryLineSource",
    "ParseError",
    "PurchaseRecord",
    "Selector",
    "SourceOpenError",
    "TallyConfig",
    "TallyError",
    "build_report",
    "build_report_from_many",
    "fetch_higher_cost",
    "merge_aggregates",
    "reduce_aggregates",
    "render_report",
]


def build_report(descriptor: SourceDescriptor, config: TallyConfig | None = None) -> Aggregate:
    """Aggregate a single source.

    Args:
        descriptor: Line source, file path, or bare source name.
        config: Optional runtime config; read from environment if omitted.

    Returns:
        Aggregate of the source.

    Raises:
        AggregateFailure: If the source cannot be opened or parsed.
    """
    return orchestrator.build_report(descriptor, config or TallyConfig.from_env())


def build_report_from_many(
    descriptors: Sequence[SourceDescriptor],
    config: TallyConfig | None = None,
) -> Aggregate:
    """Aggregate many sources concurrently.

    Args:
        descriptors: Sources to aggregate.
        config: Optional runtime config; read from environment if omitted.

    Returns:
        Merged aggregate of all sources.

    Raises:
        AggregateFailure: If any source cannot be opened or parsed.
    """
    return orchestrator.build_report_from_many(descriptors, config or TallyConfig.from_env())
