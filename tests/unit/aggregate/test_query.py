"""Unit tests for highest-entry queries."""

from __future__ import annotations

import pytest

from aggregate.aggregator import fold_lines
from aggregate.query import fetch_higher_cost
from core.errors import EmptyAggregateError, InvalidSelectorError
from core.types import Aggregate, Selector

_AGGREGATE = fold_lines(["1,pizza,48", "2,acai,45", "1,pizza,27"])


def test_fetch_higher_cost_for_users() -> None:
    """Users selector should return the biggest spender."""
    assert fetch_higher_cost(_AGGREGATE, "users").as_pair() == ("1", 75)


def test_fetch_higher_cost_for_foods() -> None:
    """Foods selector should return the most ordered item."""
    entry = fetch_higher_cost(_AGGREGATE, Selector.FOODS)

    assert (entry.selector, entry.key, entry.value) == (Selector.FOODS, "pizza", 2)


@pytest.mark.parametrize("selector", ["drinks", "", "Users", "totals"])
def test_fetch_higher_cost_rejects_unknown_selectors(selector: str) -> None:
    with pytest.raises(InvalidSelectorError):
        fetch_higher_cost(_AGGREGATE, selector)


def test_fetch_higher_cost_breaks_ties_by_smallest_key() -> None:
    """Ties should resolve to the lexicographically smallest key."""
    aggregate = Aggregate(totals={"b": 10, "a": 10, "c": 3}, counts={"z": 1, "y": 1})

    assert fetch_higher_cost(aggregate, "users").key == "a"
    assert fetch_higher_cost(aggregate, "foods").key == "y"


def test_fetch_higher_cost_on_empty_aggregate_raises() -> None:
    with pytest.raises(EmptyAggregateError) as error_info:
        fetch_higher_cost(Aggregate.empty(), "users")

    assert error_info.value.selector == "users"
