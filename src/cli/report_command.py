"""Report CLI command wiring.

This module registers the report subcommand and renders the aggregate
built from the listed sources.
"""

from __future__ import annotations

import argparse
from typing import Any

from core.config import TallyConfig
from core.constants import (
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_REPORT_OPTION,
    REPORT_OPTION_ALL,
    SUPPORTED_OUTPUT_FORMATS,
)
from core.types import supported_selectors
from ingest.orchestrator import build_report_from_many
from report.formatter import render_report


def add_report_command(subparsers: Any) -> None:
    """Register report subcommand."""
    parser = subparsers.add_parser(
        "report",
        help="Aggregate purchase sources and print the highest entries",
    )
    parser.add_argument("sources", nargs="+", help="Source files or bare source names")
    parser.add_argument(
        "--query",
        default=DEFAULT_REPORT_OPTION,
        choices=(*supported_selectors(), REPORT_OPTION_ALL),
        help="Sub-aggregate to report",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        default=DEFAULT_OUTPUT_FORMAT,
        choices=SUPPORTED_OUTPUT_FORMATS,
        help="Report output format",
    )


def run_report_command(config: TallyConfig, args: argparse.Namespace) -> int:
    """Handle report command invocation."""
    aggregate = build_report_from_many(args.sources, config)
    print(render_report(aggregate, args.query, args.output_format))
    return 0
