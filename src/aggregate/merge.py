"""Associative merge of partial aggregates.

Merging sums values key-wise and treats absent keys as zero, so any
partition of the same records reduces to the same aggregate.
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable, Mapping

from core.types import Aggregate


def merge_aggregates(left: Aggregate, right: Aggregate) -> Aggregate:
    """Combine two aggregates into a new one.

    Args:
        left: First aggregate.
        right: Second aggregate.

    Returns:
        Aggregate holding the key-wise sums of both inputs.
    """
    return Aggregate(
        totals=_merge_counts(left.totals, right.totals),
        counts=_merge_counts(left.counts, right.counts),
    )


def reduce_aggregates(aggregates: Iterable[Aggregate]) -> Aggregate:
    """Merge any number of aggregates, starting from the identity."""
    return reduce(merge_aggregates, aggregates, Aggregate.empty())


def _merge_counts(left: Mapping[str, int], right: Mapping[str, int]) -> dict[str, int]:
    merged = dict(left)
    for key, value in right.items():
        merged[key] = merged.get(key, 0) + value
    return merged
