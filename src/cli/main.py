"""Tally CLI entry points.
This module exposes report commands over purchase sources.
It maps argparse commands onto orchestrator calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Sequence

from cli.report_command import add_report_command, run_report_command
from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.config import TallyConfig, parse_max_workers
from core.errors import TallyError


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tally", description="Tally purchase report CLI")
    parser.add_argument("--data-root", help="Override TALLY_DATA_ROOT for this command")
    parser.add_argument("--workers", help="Override TALLY_MAX_WORKERS for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_report_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Tally CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.data_root, args.workers)
        if args.command == "report":
            return run_report_command(config, args)
        if args.command == "run-spec":
            return run_run_spec_command(config, args)
    except TallyError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(data_root: str | None, workers: str | None) -> TallyConfig:
    """Build config with optional CLI overrides.

    Args:
        data_root: Optional override path.
        workers: Optional worker-count override.

    Returns:
        Configured runtime config.
    """
    config = TallyConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    if workers:
        config = replace(config, max_workers=parse_max_workers(workers))
    return config
