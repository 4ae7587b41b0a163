"""Unit tests for aggregate merging."""

from __future__ import annotations

import itertools

from aggregate.aggregator import fold_lines
from aggregate.merge import merge_aggregates, reduce_aggregates
from core.types import Aggregate

_FIRST = fold_lines(["1,pizza,48", "2,acai,45"])
_SECOND = fold_lines(["1,pizza,27", "3,churrasco,90"])
_THIRD = fold_lines(["3,açaí,10", "4,pizza,0", "2,acai,1"])


def test_merge_sums_shared_keys_and_keeps_unique_keys() -> None:
    """Shared keys should sum; one-sided keys should be copied."""
    merged = merge_aggregates(_FIRST, _SECOND)

    assert merged.totals == {"1": 75, "2": 45, "3": 90}
    assert merged.counts == {"pizza": 2, "acai": 1, "churrasco": 1}


def test_merge_is_commutative() -> None:
    for left, right in itertools.permutations([_FIRST, _SECOND, _THIRD], 2):
        assert merge_aggregates(left, right) == merge_aggregates(right, left)


def test_merge_is_associative() -> None:
    for first, second, third in itertools.permutations([_FIRST, _SECOND, _THIRD]):
        left_grouped = merge_aggregates(merge_aggregates(first, second), third)
        right_grouped = merge_aggregates(first, merge_aggregates(second, third))
        assert left_grouped == right_grouped


def test_merge_with_identity_returns_equal_aggregate() -> None:
    """Merging the identity should leave any aggregate unchanged."""
    for aggregate in (_FIRST, _SECOND, _THIRD, Aggregate.empty()):
        assert merge_aggregates(Aggregate.empty(), aggregate) == aggregate
        assert merge_aggregates(aggregate, Aggregate.empty()) == aggregate


def test_merge_does_not_mutate_inputs() -> None:
    """Inputs are value objects and must stay untouched."""
    before = (dict(_FIRST.totals), dict(_FIRST.counts))

    merge_aggregates(_FIRST, _SECOND)

    assert (dict(_FIRST.totals), dict(_FIRST.counts)) == before


def test_reduce_aggregates_of_nothing_is_identity() -> None:
    assert reduce_aggregates([]) == Aggregate.empty()
