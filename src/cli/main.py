"""Plantel CLI entry points.
This module exposes roster ingest and snapshot reporting commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from core.config import PlantelConfig
from core.constants import SUPPORTED_DIMENSIONS
from core.errors import PlantelError
from core.output_lines import (
    format_comparison,
    format_field_statistics,
    format_headline,
    format_history_row,
    format_snapshot,
    format_snapshot_result,
    format_summary,
)
from core.types import IngestOptions
from store.analytics_sdk import PlantelClient
from store.snapshot_codec import snapshot_to_document


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="plantel", description="Plantel roster analytics CLI")
    parser.add_argument("--data-root", help="Override PLANTEL_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_ingest_command(subparsers)
    _add_current_command(subparsers)
    _add_history_command(subparsers)
    _add_compare_command(subparsers)
    subparsers.add_parser("units", help="List units with their current headline")
    subparsers.add_parser("summary", help="Show totals and size classes across units")
    _add_field_stats_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Plantel CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    client = _build_client(args.data_root)
    try:
        return _dispatch(client, args)
    except PlantelError as error:
        print(f"error={type(error).__name__}: {error}", file=sys.stderr)
        return 1


def _dispatch(client: PlantelClient, args: argparse.Namespace) -> int:
    if args.command == "ingest":
        return _run_ingest_command(client, args)
    if args.command == "current":
        return _run_current_command(client, args)
    if args.command == "history":
        return _print_lines(format_history_row(item) for item in client.get_history(args.unit))
    if args.command == "compare":
        return _print_lines(format_comparison(client.compare(args.first, args.second)))
    if args.command == "units":
        return _print_lines(format_headline(item) for item in client.list_units())
    if args.command == "summary":
        return _print_lines(format_summary(client.summarize()))
    if args.command == "field-stats":
        return _print_lines(format_field_statistics(client.field_statistics(args.dimension)))
    if args.command == "run-spec":
        return run_run_spec_command(client, args)
    raise PlantelError(f"Unsupported command: {args.command}")


def _build_client(data_root: str | None) -> PlantelClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = PlantelConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return PlantelClient(config)


def _run_ingest_command(client: PlantelClient, args: argparse.Namespace) -> int:
    """Handle ingest command.

    Exit code is 1 when any unit failed to commit.
    """
    options = IngestOptions(source_uri=args.source, unit_column=args.unit_column)
    results = client.ingest(options)
    _print_lines(format_snapshot_result(result) for result in results)
    return 0 if all(result.succeeded for result in results) else 1


def _run_current_command(client: PlantelClient, args: argparse.Namespace) -> int:
    if args.version is None:
        snapshot = client.get_current(args.unit)
    else:
        snapshot = client.get_version(args.unit, args.version)
    if args.json:
        print(json.dumps(snapshot_to_document(snapshot), ensure_ascii=False, indent=2))
        return 0
    return _print_lines(format_snapshot(snapshot))


def _print_lines(lines: Any) -> int:
    for line in lines:
        print(line)
    return 0


def _add_ingest_command(subparsers: Any) -> None:
    """Register ingest subcommand."""
    parser = subparsers.add_parser("ingest", help="Ingest a roster file or s3:// object")
    parser.add_argument("source", help="Roster .xlsx/.csv path or s3://bucket/key")
    parser.add_argument(
        "--unit-column",
        help="Column naming the organizational unit (default PLANTEL_UNIT_COLUMN)",
    )


def _add_current_command(subparsers: Any) -> None:
    """Register current subcommand."""
    parser = subparsers.add_parser("current", help="Show a unit's current snapshot")
    parser.add_argument("--unit", required=True, help="Unit id")
    parser.add_argument("--version", type=int, help="Show a specific historical version")
    parser.add_argument("--json", action="store_true", help="Print the snapshot as JSON")


def _add_history_command(subparsers: Any) -> None:
    """Register history subcommand."""
    parser = subparsers.add_parser("history", help="List a unit's snapshot versions")
    parser.add_argument("--unit", required=True, help="Unit id")


def _add_compare_command(subparsers: Any) -> None:
    """Register compare subcommand."""
    parser = subparsers.add_parser("compare", help="Compare two units' current snapshots")
    parser.add_argument("--first", required=True, help="First unit id")
    parser.add_argument("--second", required=True, help="Second unit id")


def _add_field_stats_command(subparsers: Any) -> None:
    """Register field-stats subcommand."""
    parser = subparsers.add_parser(
        "field-stats",
        help="Consolidate one dimension across all units",
    )
    parser.add_argument("--dimension", required=True, choices=SUPPORTED_DIMENSIONS)
