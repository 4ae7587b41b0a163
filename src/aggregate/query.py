"""Highest-entry queries over a completed aggregate."""

from __future__ import annotations

from core.errors import EmptyAggregateError
from core.types import Aggregate, MaxEntry, Selector


def fetch_higher_cost(aggregate: Aggregate, selector: Selector | str) -> MaxEntry:
    """Return the highest-valued entry of one sub-aggregate.

    Ties go to the lexicographically smallest key.

    Args:
        aggregate: Completed aggregate.
        selector: ``users`` for spend totals or ``foods`` for item counts.

    Returns:
        Winning key and its value.

    Raises:
        InvalidSelectorError: If the selector is outside the closed set.
        EmptyAggregateError: If the selected sub-aggregate has no entries.
    """
    resolved = Selector.parse(selector)
    entries = aggregate.sub_map(resolved)
    if not entries:
        raise EmptyAggregateError(resolved.value)
    key, value = min(entries.items(), key=lambda item: (-item[1], item[0]))
    return MaxEntry(selector=resolved, key=key, value=value)
