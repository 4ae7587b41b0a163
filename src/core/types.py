"""Shared typed models.

This module defines immutable data models used by ingest, aggregate,
query, and reporting layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from core.errors import InvalidSelectorError


class Selector(str, Enum):
    """Closed set of sub-aggregates a query may target."""

    USERS = "users"
    FOODS = "foods"

    @classmethod
    def parse(cls, raw_value: "str | Selector") -> "Selector":
        """Resolve a selector name.

        Args:
            raw_value: Selector member or its string name.

        Returns:
            Matching selector member.

        Raises:
            InvalidSelectorError: If the name is outside the closed set.
        """
        if isinstance(raw_value, Selector):
            return raw_value
        for member in cls:
            if member.value == raw_value:
                return member
        raise InvalidSelectorError(str(raw_value), supported_selectors())


def supported_selectors() -> tuple[str, ...]:
    """Return selector names accepted by queries."""
    return tuple(member.value for member in Selector)


@dataclass(frozen=True)
class PurchaseRecord:
    """One parsed purchase line.

    Attributes:
        identifier: User identifier that paid.
        category: Food item bought.
        amount: Non-negative integer price.
    """

    identifier: str
    category: str
    amount: int


@dataclass(frozen=True)
class Aggregate:
    """Two-part accumulated report.

    Attributes:
        totals: Read-only accumulated amount per user identifier.
        counts: Read-only occurrence count per food category.
    """

    totals: Mapping[str, int] = field(default_factory=dict)
    counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "totals", MappingProxyType(dict(self.totals)))
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))

    @classmethod
    def empty(cls) -> "Aggregate":
        """Return the additive identity aggregate."""
        return cls(totals={}, counts={})

    def sub_map(self, selector: Selector) -> Mapping[str, int]:
        """Return the sub-aggregate a selector names."""
        if selector is Selector.USERS:
            return self.totals
        return self.counts


@dataclass(frozen=True)
class MaxEntry:
    """Highest-valued entry of one sub-aggregate."""

    selector: Selector
    key: str
    value: int

    def as_pair(self) -> tuple[str, int]:
        return (self.key, self.value)
