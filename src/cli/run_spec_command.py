"""Run-spec CLI command wiring.

This module registers the run-spec subcommand and delegates execution to
the report-spec engine shared with SDK callers.
"""

from __future__ import annotations

import argparse
from typing import Any

from core.config import TallyConfig
from report.report_spec import execute_report_spec_file


def add_run_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Run a declarative YAML report spec",
    )
    parser.add_argument("spec_file", help="Path to YAML report-spec file")


def run_run_spec_command(config: TallyConfig, args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    output_blocks = execute_report_spec_file(args.spec_file, config)
    print("\n\n".join(output_blocks))
    return 0
