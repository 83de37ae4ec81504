"""Categorical aggregation over employee records.

This module groups records by a dimension label and computes
counts and two-decimal percentages in a deterministic order.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Callable, Iterable, Mapping

from analytics.bucketing import age_range, tenure_range
from core.constants import (
    DIMENSION_AGE_RANGE,
    DIMENSION_CONTRACT_TYPE,
    DIMENSION_DEPARTMENT,
    DIMENSION_FUNCTION,
    DIMENSION_GENDER,
    DIMENSION_POSITION,
    DIMENSION_SALARY_SCALE,
    DIMENSION_SUBDEPARTMENT,
    DIMENSION_TENURE_RANGE,
    PERCENTAGE_PRECISION,
    SUPPORTED_DIMENSIONS,
)
from core.errors import PlantelAnalyticsError
from core.types import CategoryBucket, EmployeeRecord

LabelFunction = Callable[[EmployeeRecord], str]


def dimension_labeler(dimension: str, reference_date: date) -> LabelFunction:
    """Return the label function for a dimension.

    Args:
        dimension: Dimension name.
        reference_date: Date used by age and tenure ranges.

    Returns:
        Function mapping a record to its label.

    Raises:
        PlantelAnalyticsError: If dimension is unsupported.
    """
    labelers: dict[str, LabelFunction] = {
        DIMENSION_CONTRACT_TYPE: lambda record: record.contract_type,
        DIMENSION_FUNCTION: lambda record: record.function,
        DIMENSION_SALARY_SCALE: lambda record: record.salary_scale,
        DIMENSION_AGE_RANGE: lambda record: age_range(record.birth_date, reference_date),
        DIMENSION_TENURE_RANGE: lambda record: tenure_range(record.hire_date, reference_date),
        DIMENSION_GENDER: lambda record: record.gender,
        DIMENSION_DEPARTMENT: lambda record: record.department,
        DIMENSION_SUBDEPARTMENT: lambda record: record.subdepartment,
        DIMENSION_POSITION: lambda record: record.position,
    }
    labeler = labelers.get(dimension)
    if labeler is None:
        raise PlantelAnalyticsError(unsupported_dimension_message(dimension))
    return labeler


def aggregate_records(
    records: list[EmployeeRecord],
    labeler: LabelFunction,
) -> tuple[CategoryBucket, ...]:
    """Group records by label into count and percentage buckets.

    Args:
        records: Normalized employee records.
        labeler: Function returning each record's label.

    Returns:
        Buckets sorted by descending count then label; empty when
        there are no records.
    """
    return buckets_from_counts(Counter(labeler(record) for record in records))


def buckets_from_counts(counts: Mapping[str, int]) -> tuple[CategoryBucket, ...]:
    """Build sorted percentage buckets from label counts.

    Args:
        counts: Count per label.

    Returns:
        Buckets sorted by descending count then label, with percentages
        that add up to exactly 100.
    """
    total = sum(counts.values())
    if total == 0:
        return ()
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    shares = apportion_percentages([count for _, count in ordered], total)
    return tuple(
        CategoryBucket(label=label, count=count, percentage=share)
        for (label, count), share in zip(ordered, shares)
    )


def merge_bucket_counts(bucket_groups: Iterable[Iterable[CategoryBucket]]) -> dict[str, int]:
    """Sum bucket counts by label across several breakdowns."""
    merged: Counter[str] = Counter()
    for buckets in bucket_groups:
        for bucket in buckets:
            merged[bucket.label] += bucket.count
    return dict(merged)


def apportion_percentages(counts: list[int], total: int) -> list[float]:
    """Split 100 percent across counts using the largest-remainder method.

    Each share is floored to the percentage precision, then the leftover
    steps go to the largest remainders, earlier counts first on ties.
    Rounded shares therefore always sum to exactly 100.

    Args:
        counts: Counts in display order.
        total: Sum of counts; must be positive.

    Returns:
        One percentage per count.
    """
    steps = 100 * 10**PERCENTAGE_PRECISION
    floors = [count * steps // total for count in counts]
    remainders = [count * steps % total for count in counts]
    leftover = steps - sum(floors)
    by_remainder = sorted(range(len(counts)), key=lambda index: -remainders[index])
    for index in by_remainder[:leftover]:
        floors[index] += 1
    return [round(share / 10**PERCENTAGE_PRECISION, PERCENTAGE_PRECISION) for share in floors]


def unsupported_dimension_message(dimension: str) -> str:
    """Build the error message for an unknown dimension name."""
    supported = ", ".join(SUPPORTED_DIMENSIONS)
    return f"Unsupported dimension '{dimension}'. Choose one of: {supported}."
