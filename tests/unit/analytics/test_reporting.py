"""Unit tests for cross-unit reporting."""

from __future__ import annotations

import pytest

from analytics.reporting import compare_snapshots, consolidate_dimension, summarize_units
from core.errors import PlantelAnalyticsError
from tests.roster_factories import salary, snapshot


def test_compare_snapshots_subtracts_second_from_first() -> None:
    """Differences should be first unit minus second unit."""
    first = snapshot("hacienda", total_records=4, salary_summary=salary(400000.0, 4))
    second = snapshot("salud", total_records=2, salary_summary=salary(300000.0, 2))

    result = compare_snapshots(first, second)

    assert (
        result.headcount_difference,
        result.average_salary_difference,
        result.payroll_mass_difference,
    ) == (2, -50000.0, 100000.0)


def test_summarize_units_classifies_sizes() -> None:
    """Units should be counted in small, medium, and large classes."""
    snapshots = [
        snapshot("hacienda", total_records=40),
        snapshot("salud", total_records=250),
        snapshot("educacion", total_records=900),
    ]

    summary = summarize_units(snapshots)

    assert dict(summary.size_classes) == {"small": 1, "medium": 1, "large": 1}


def test_summarize_units_orders_by_headcount() -> None:
    """Largest units should be listed first."""
    summary = summarize_units(
        [snapshot("hacienda", total_records=3), snapshot("salud", total_records=7)]
    )

    assert [item.unit_id for item in summary.units] == ["salud", "hacienda"]


def test_summarize_units_totals_headcount() -> None:
    """Overall headcount should sum unit headcounts."""
    summary = summarize_units(
        [snapshot("hacienda", total_records=3), snapshot("salud", total_records=7)]
    )

    assert summary.total_headcount == 10


def test_consolidate_dimension_recomputes_percentages() -> None:
    """Merged buckets should carry percentages of the combined total."""
    statistics = consolidate_dimension(
        [snapshot("hacienda", total_records=1), snapshot("salud", total_records=3)],
        "genero",
    )

    assert (statistics.total, statistics.buckets[0].percentage) == (4, 100.0)


def test_consolidate_dimension_rejects_unknown_dimension() -> None:
    """Unknown dimension names should raise an analytics error."""
    with pytest.raises(PlantelAnalyticsError):
        consolidate_dimension([snapshot()], "altura")
    assert True
