"""Unit tests for snapshot quality validation."""

from __future__ import annotations

from analytics.quality_validation import validate_snapshot
from core.types import SalarySummary
from tests.roster_factories import FIXED_NOW, salary, snapshot


def _kinds(report) -> tuple[str, ...]:
    return tuple(problem.kind for problem in report.problems)


def test_validate_snapshot_consistent_unit_scores_full_marks() -> None:
    """A consistent snapshot should keep the base score."""
    report = validate_snapshot(snapshot(), validated_at=FIXED_NOW)

    assert (report.score, report.problems) == (100, ())


def test_validate_snapshot_zero_mass_applies_both_payroll_penalties() -> None:
    """Headcount with no payroll should cost 15 plus 25 points."""
    report = validate_snapshot(
        snapshot(salary_summary=salary(0.0, 0, excluded_count=3)),
        validated_at=FIXED_NOW,
    )

    assert (report.score, _kinds(report)) == (
        60,
        ("zero_payroll_mass", "headcount_without_payroll"),
    )


def test_validate_snapshot_empty_unit_flags_missing_headcount() -> None:
    """A snapshot without records should lose the headcount penalty only."""
    report = validate_snapshot(
        snapshot(total_records=0, salary_summary=salary(0.0, 0)),
        validated_at=FIXED_NOW,
    )

    assert (report.score, _kinds(report)) == (80, ("missing_headcount",))


def test_validate_snapshot_detects_inconsistent_average() -> None:
    """An average off by more than 1% of mass over count should be flagged."""
    inconsistent = SalarySummary(
        average=100.0,
        minimum=100.0,
        maximum=200.0,
        mass=300.0,
        salaried_count=2,
    )

    report = validate_snapshot(snapshot(salary_summary=inconsistent), validated_at=FIXED_NOW)

    assert (report.score, _kinds(report)) == (90, ("average_salary_mismatch",))


def test_validate_snapshot_notes_unpaid_agents_without_penalty() -> None:
    """Agents without salary are reported but do not lower the score."""
    report = validate_snapshot(
        snapshot(salary_summary=salary(200000.0, 2, excluded_count=1)),
        validated_at=FIXED_NOW,
    )

    assert (report.score, _kinds(report)) == (100, ("salary_headcount_gap",))


def test_validate_snapshot_stacks_payroll_and_average_penalties() -> None:
    """Independent problems should each subtract their penalty."""
    broken = snapshot(salary_summary=SalarySummary(5.0, 5.0, 5.0, 0.0))

    report = validate_snapshot(broken, validated_at=FIXED_NOW)

    assert report.score == 50
