"""Cross-unit reporting over current snapshots.

This module builds headlines, pairwise comparisons, overall totals,
and consolidated dimension statistics for the reporting layer.
"""

from __future__ import annotations

from analytics.aggregation import (
    buckets_from_counts,
    merge_bucket_counts,
    unsupported_dimension_message,
)
from core.constants import MEDIUM_UNIT_MAX_HEADCOUNT, SMALL_UNIT_MAX_HEADCOUNT, SUPPORTED_DIMENSIONS
from core.errors import PlantelAnalyticsError
from core.types import (
    AnalysisSnapshot,
    ComparisonResult,
    FieldStatistics,
    OverallSummary,
    UnitHeadline,
)


def unit_headline(snapshot: AnalysisSnapshot) -> UnitHeadline:
    """Extract headline figures from a snapshot."""
    return UnitHeadline(
        unit_id=snapshot.unit_id,
        unit_name=snapshot.unit_name,
        version=snapshot.version,
        headcount=snapshot.total_records,
        average_salary=snapshot.salary.average,
        payroll_mass=snapshot.salary.mass,
        updated_at=snapshot.created_at,
    )


def compare_snapshots(first: AnalysisSnapshot, second: AnalysisSnapshot) -> ComparisonResult:
    """Compare two units' snapshots.

    Args:
        first: Snapshot of the first unit.
        second: Snapshot of the second unit.

    Returns:
        Headlines and first-minus-second differences.
    """
    first_headline = unit_headline(first)
    second_headline = unit_headline(second)
    return ComparisonResult(
        first=first_headline,
        second=second_headline,
        headcount_difference=first_headline.headcount - second_headline.headcount,
        average_salary_difference=first_headline.average_salary
        - second_headline.average_salary,
        payroll_mass_difference=first_headline.payroll_mass - second_headline.payroll_mass,
    )


def summarize_units(snapshots: list[AnalysisSnapshot]) -> OverallSummary:
    """Total headcount and payroll across units and classify unit sizes.

    Args:
        snapshots: One current snapshot per unit.

    Returns:
        Overall summary with units ordered by descending headcount.
    """
    headlines = sorted(
        (unit_headline(snapshot) for snapshot in snapshots),
        key=lambda item: (-item.headcount, item.unit_name),
    )
    size_classes = {"small": 0, "medium": 0, "large": 0}
    for headline in headlines:
        size_classes[_size_class(headline.headcount)] += 1
    return OverallSummary(
        unit_count=len(headlines),
        total_headcount=sum(item.headcount for item in headlines),
        total_payroll_mass=sum(item.payroll_mass for item in headlines),
        size_classes=size_classes,
        units=tuple(headlines),
    )


def consolidate_dimension(snapshots: list[AnalysisSnapshot], dimension: str) -> FieldStatistics:
    """Merge one dimension's buckets across units.

    Args:
        snapshots: One current snapshot per unit.
        dimension: Dimension name to consolidate.

    Returns:
        Consolidated statistics with recomputed percentages.

    Raises:
        PlantelAnalyticsError: If dimension is unsupported.
    """
    if dimension not in SUPPORTED_DIMENSIONS:
        raise PlantelAnalyticsError(unsupported_dimension_message(dimension))
    counts = merge_bucket_counts(snapshot.breakdowns.get(dimension, ()) for snapshot in snapshots)
    buckets = buckets_from_counts(counts)
    return FieldStatistics(
        dimension=dimension,
        total=sum(bucket.count for bucket in buckets),
        buckets=buckets,
    )


def _size_class(headcount: int) -> str:
    if headcount < SMALL_UNIT_MAX_HEADCOUNT:
        return "small"
    if headcount < MEDIUM_UNIT_MAX_HEADCOUNT:
        return "medium"
    return "large"
