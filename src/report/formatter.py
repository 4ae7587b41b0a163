"""Report rendering for completed aggregates.

This module is the reporting consumer: it receives the final aggregate
and an option string and returns formatted text or JSON output.
"""

from __future__ import annotations

import json
from typing import Mapping

from core.constants import REPORT_OPTION_ALL, SUPPORTED_OUTPUT_FORMATS
from core.errors import TallyReportFormatError
from core.types import Aggregate, MaxEntry, Selector
from aggregate.query import fetch_higher_cost

_SECTION_TITLES = {
    Selector.USERS: "Spend per user",
    Selector.FOODS: "Orders per food",
}


def render_report(aggregate: Aggregate, option: str, output_format: str = "text") -> str:
    """Render an aggregate for one selector or for all of them.

    Args:
        aggregate: Completed aggregate.
        option: Selector name or ``all``.
        output_format: ``text`` or ``json``.

    Returns:
        Rendered report.

    Raises:
        InvalidSelectorError: If option names an unknown selector.
        EmptyAggregateError: If a selected sub-aggregate is empty.
        TallyReportFormatError: If output format is unsupported.
    """
    selectors = resolve_report_selectors(option)
    if output_format == "text":
        return _render_text(aggregate, selectors)
    if output_format == "json":
        return _render_json(aggregate, selectors)
    raise TallyReportFormatError(
        f"Unsupported report format '{output_format}'. "
        f"Use one of: {', '.join(SUPPORTED_OUTPUT_FORMATS)}."
    )


def resolve_report_selectors(option: str) -> tuple[Selector, ...]:
    """Expand a report option into the selectors it covers."""
    if option == REPORT_OPTION_ALL:
        return tuple(Selector)
    return (Selector.parse(option),)


def _render_text(aggregate: Aggregate, selectors: tuple[Selector, ...]) -> str:
    sections: list[str] = []
    for selector in selectors:
        entry = fetch_higher_cost(aggregate, selector)
        rows = [f"{_SECTION_TITLES[selector]} (highest: {entry.key}={entry.value})"]
        rows.extend(f"  {key}\t{value}" for key, value in _sorted_rows(aggregate.sub_map(selector)))
        sections.append("\n".join(rows))
    return "\n\n".join(sections)


def _render_json(aggregate: Aggregate, selectors: tuple[Selector, ...]) -> str:
    highest: dict[str, dict[str, object]] = {}
    for selector in selectors:
        highest[selector.value] = _entry_payload(fetch_higher_cost(aggregate, selector))
    payload = {
        "totals": dict(aggregate.totals),
        "counts": dict(aggregate.counts),
        "highest": highest,
    }
    return json.dumps(payload, sort_keys=True, ensure_ascii=False)


def _entry_payload(entry: MaxEntry) -> dict[str, object]:
    return {"key": entry.key, "value": entry.value}


def _sorted_rows(entries: Mapping[str, int]) -> list[tuple[str, int]]:
    return sorted(entries.items(), key=lambda item: (-item[1], item[0]))
