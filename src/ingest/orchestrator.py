"""Concurrent report orchestration.

This module runs one open -> parse -> fold pipeline per source on a
bounded worker pool and reduces the partial aggregates once every
worker has finished. The first failing source aborts the whole run.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
import threading
import time
from typing import Sequence

from core.config import TallyConfig
from core.errors import AggregateFailure, ParseError, SourceOpenError
from core.logging_config import get_logger
from core.types import Aggregate
from aggregate.aggregator import fold_lines
from aggregate.merge import reduce_aggregates
from ingest.line_source import LineSource, SourceDescriptor, resolve_source

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class SourceResult:
    """Aggregate produced by one finished source pipeline."""

    source_id: str
    aggregate: Aggregate


class ReportRunner:
    """Runner for concurrent multi-source report builds."""

    def __init__(self, config: TallyConfig) -> None:
        self._config = config

    def run(self, descriptors: Sequence[SourceDescriptor]) -> Aggregate:
        """Build one aggregate over every source.

        Args:
            descriptors: Sources to aggregate, in any order.

        Returns:
            Merged aggregate of all sources.

        Raises:
            AggregateFailure: If any source fails to open or parse.
        """
        sources = [resolve_source(descriptor, self._config) for descriptor in descriptors]
        if not sources:
            return Aggregate.empty()
        started_at = time.perf_counter()
        results = self._run_pipelines(sources)
        aggregate = reduce_aggregates(result.aggregate for result in results)
        _LOGGER.info(
            "report_built",
            source_count=len(sources),
            user_count=len(aggregate.totals),
            food_count=len(aggregate.counts),
            elapsed_ms=round((time.perf_counter() - started_at) * 1000, 3),
        )
        return aggregate

    def _run_pipelines(self, sources: list[LineSource]) -> list[SourceResult]:
        cancel_event = threading.Event()
        worker_count = min(len(sources), self._config.max_workers)
        executor = ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="tally")
        try:
            futures: dict[Future[SourceResult], LineSource] = {
                executor.submit(run_source_pipeline, source, cancel_event): source
                for source in sources
            }
            results: list[SourceResult] = []
            for future in as_completed(futures):
                source = futures[future]
                try:
                    results.append(future.result())
                except (SourceOpenError, ParseError) as error:
                    _abort_pending(futures, cancel_event)
                    _LOGGER.error(
                        "report_failed",
                        source_id=source.source_id,
                        error_type=type(error).__name__,
                        message=str(error),
                    )
                    raise AggregateFailure(source.source_id, error) from error
                except BaseException:
                    _abort_pending(futures, cancel_event)
                    raise
            return results
        finally:
            executor.shutdown(wait=False, cancel_futures=True)


def run_source_pipeline(
    source: LineSource,
    cancel_event: threading.Event | None = None,
) -> SourceResult:
    """Open, parse, and fold one source.

    Args:
        source: Line source owned by this pipeline.
        cancel_event: Optional event that stops the fold early.

    Returns:
        Aggregate of the source tagged with its identity.

    Raises:
        SourceOpenError: If the source cannot be opened or read.
        ParseError: On the first malformed line.
    """
    try:
        lines = source.open()
    except OSError as error:
        raise SourceOpenError(source.source_id, f"open failed: {error}") from error
    try:
        aggregate = fold_lines(lines, source.source_id, cancel_event)
    except OSError as error:
        raise SourceOpenError(source.source_id, f"read failed: {error}") from error
    finally:
        close = getattr(lines, "close", None)
        if close is not None:
            close()
    return SourceResult(source_id=source.source_id, aggregate=aggregate)


def build_report_from_many(
    descriptors: Sequence[SourceDescriptor],
    config: TallyConfig,
) -> Aggregate:
    """Aggregate many sources concurrently.

    Args:
        descriptors: Sources to aggregate.
        config: Runtime configuration.

    Returns:
        Merged aggregate.

    Raises:
        AggregateFailure: If any source fails.
    """
    return ReportRunner(config).run(descriptors)


def build_report(descriptor: SourceDescriptor, config: TallyConfig) -> Aggregate:
    """Aggregate a single source through the multi-source path."""
    return build_report_from_many([descriptor], config)


def _abort_pending(
    futures: dict[Future[SourceResult], LineSource],
    cancel_event: threading.Event,
) -> None:
    cancel_event.set()
    for pending in futures:
        pending.cancel()
