"""Tab-separated output rows for CLI and run-spec results.

This module renders typed results into printable lines so the CLI and
the run-spec engine print identical output for the same operation.
"""

from __future__ import annotations

from core.types import (
    AnalysisSnapshot,
    ComparisonResult,
    FieldStatistics,
    OverallSummary,
    SnapshotResult,
    UnitHeadline,
)


def format_snapshot_result(result: SnapshotResult) -> str:
    """Render one per-unit ingest result."""
    if not result.succeeded:
        return (
            f"{result.unit_id}\tfailed\t{result.record_count}\t"
            f"{result.error_kind}: {result.error_message}"
        )
    score = result.quality.score if result.quality else "-"
    return f"{result.unit_id}\tv{result.version}\t{result.record_count}\tquality={score}"


def format_snapshot(snapshot: AnalysisSnapshot) -> tuple[str, ...]:
    """Render a snapshot headline followed by every bucket row."""
    lines = [
        f"{snapshot.unit_id}\tv{snapshot.version}\t"
        f"{'current' if snapshot.current else 'superseded'}\t"
        f"agents={snapshot.total_records}\t"
        f"average={snapshot.salary.average:.2f}\t"
        f"mass={snapshot.salary.mass:.2f}"
    ]
    for dimension, buckets in snapshot.breakdowns.items():
        lines.extend(
            f"{dimension}\t{bucket.label}\t{bucket.count}\t{bucket.percentage:.2f}%"
            for bucket in buckets
        )
    return tuple(lines)


def format_history_row(snapshot: AnalysisSnapshot) -> str:
    """Render one history entry."""
    marker = "*" if snapshot.current else "-"
    return (
        f"{snapshot.version}\t{marker}\t{snapshot.created_at.isoformat()}\t"
        f"{snapshot.source.file_name}\t{snapshot.source.record_count}"
    )


def format_headline(headline: UnitHeadline) -> str:
    """Render a unit headline row."""
    return (
        f"{headline.unit_id}\t{headline.unit_name}\tv{headline.version}\t"
        f"{headline.headcount}\t{headline.average_salary:.2f}\t{headline.payroll_mass:.2f}"
    )


def format_comparison(result: ComparisonResult) -> tuple[str, ...]:
    """Render a two-unit comparison."""
    return (
        format_headline(result.first),
        format_headline(result.second),
        f"difference\tagents={result.headcount_difference}\t"
        f"average={result.average_salary_difference:.2f}\t"
        f"mass={result.payroll_mass_difference:.2f}",
    )


def format_summary(summary: OverallSummary) -> tuple[str, ...]:
    """Render overall totals and per-unit rows."""
    size_row = "\t".join(f"{name}={count}" for name, count in summary.size_classes.items())
    return (
        f"units={summary.unit_count}\tagents={summary.total_headcount}\t"
        f"mass={summary.total_payroll_mass:.2f}",
        size_row,
        *(format_headline(headline) for headline in summary.units),
    )


def format_field_statistics(statistics: FieldStatistics) -> tuple[str, ...]:
    """Render consolidated statistics for one dimension."""
    return (
        f"{statistics.dimension}\ttotal={statistics.total}",
        *(
            f"{bucket.label}\t{bucket.count}\t{bucket.percentage:.2f}%"
            for bucket in statistics.buckets
        ),
    )
