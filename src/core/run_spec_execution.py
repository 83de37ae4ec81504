"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to client operations so different
entry points can execute one declarative pipeline path without drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from core.errors import PlantelRunSpecError
from core.output_lines import (
    format_comparison,
    format_field_statistics,
    format_headline,
    format_history_row,
    format_snapshot,
    format_snapshot_result,
    format_summary,
)
from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.run_spec_fields import optional_int, optional_string, required_string
from core.types import (
    AnalysisSnapshot,
    ComparisonResult,
    FieldStatistics,
    IngestOptions,
    OverallSummary,
    SnapshotResult,
    UnitHeadline,
)


class RunSpecClient(Protocol):
    """Client API contract required by run-spec execution."""

    def with_data_root(self, data_root: str) -> Any: ...

    def ingest(self, options: IngestOptions) -> list[SnapshotResult]: ...

    def get_current(self, unit_id: str) -> AnalysisSnapshot: ...

    def get_version(self, unit_id: str, version: int) -> AnalysisSnapshot: ...

    def get_history(self, unit_id: str) -> list[AnalysisSnapshot]: ...

    def compare(self, first_unit_id: str, second_unit_id: str) -> ComparisonResult: ...

    def list_units(self) -> list[UnitHeadline]: ...

    def summarize(self) -> OverallSummary: ...

    def field_statistics(self, dimension: str) -> FieldStatistics: ...


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    client: RunSpecClient
    default_unit_column: str | None


def execute_run_spec_file(client: RunSpecClient, spec_file: str) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(client, spec)


def execute_run_spec(client: RunSpecClient, spec: RunSpec) -> tuple[str, ...]:
    """Execute a parsed run-spec object and return output lines."""
    execution_client = (
        client.with_data_root(spec.defaults.data_root) if spec.defaults.data_root else client
    )
    context = RunSpecExecutionContext(
        client=execution_client,
        default_unit_column=spec.defaults.unit_column,
    )
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(context, step))
    return tuple(output_lines)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    if step.command == "ingest":
        return _execute_ingest_step(context, step)
    if step.command == "current":
        return _execute_current_step(context, step)
    if step.command == "history":
        unit_id = required_string(step.args, "unit")
        return _lines(format_history_row(item) for item in context.client.get_history(unit_id))
    if step.command == "compare":
        return format_comparison(
            context.client.compare(
                required_string(step.args, "first"),
                required_string(step.args, "second"),
            )
        )
    if step.command == "units":
        return _lines(format_headline(item) for item in context.client.list_units())
    if step.command == "summary":
        return format_summary(context.client.summarize())
    if step.command == "field-stats":
        dimension = required_string(step.args, "dimension")
        return format_field_statistics(context.client.field_statistics(dimension))
    raise PlantelRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_ingest_step(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str, ...]:
    options = IngestOptions(
        source_uri=required_string(step.args, "source"),
        unit_column=optional_string(step.args, "unit_column") or context.default_unit_column,
    )
    return _lines(format_snapshot_result(result) for result in context.client.ingest(options))


def _execute_current_step(
    context: RunSpecExecutionContext,
    step: RunSpecStep,
) -> tuple[str, ...]:
    unit_id = required_string(step.args, "unit")
    version = optional_int(step.args, "version")
    if version is None:
        return format_snapshot(context.client.get_current(unit_id))
    return format_snapshot(context.client.get_version(unit_id, version))


def _lines(rows: Iterable[str]) -> tuple[str, ...]:
    return tuple(rows)
