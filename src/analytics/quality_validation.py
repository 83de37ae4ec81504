"""Snapshot quality validation.

This module scores committed snapshots for completeness and internal
consistency. It only annotates; it never rejects an ingestion.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from core.constants import (
    QUALITY_AVERAGE_MISMATCH_PENALTY,
    QUALITY_AVERAGE_TOLERANCE,
    QUALITY_BASE_SCORE,
    QUALITY_HEADCOUNT_WITHOUT_MASS_PENALTY,
    QUALITY_MISSING_HEADCOUNT_PENALTY,
    QUALITY_ZERO_MASS_PENALTY,
)
from core.types import AnalysisSnapshot, QualityProblem, QualityReport


@dataclass(frozen=True)
class _Deduction:
    """Problem paired with the score penalty it carries."""

    problem: QualityProblem
    penalty: int


def validate_snapshot(
    snapshot: AnalysisSnapshot,
    validated_at: datetime | None = None,
) -> QualityReport:
    """Score a snapshot and list the problems found.

    Args:
        snapshot: Committed snapshot to validate.
        validated_at: Optional validation timestamp; now when omitted.

    Returns:
        Quality report with a score floored at 0.
    """
    deductions = [
        *_headcount_deductions(snapshot),
        *_payroll_deductions(snapshot),
        *_average_deductions(snapshot),
        *_reconciliation_notes(snapshot),
    ]
    score = QUALITY_BASE_SCORE - sum(item.penalty for item in deductions)
    return QualityReport(
        score=max(0, score),
        problems=tuple(item.problem for item in deductions),
        validated_at=validated_at or datetime.now(timezone.utc),
    )


def _headcount_deductions(snapshot: AnalysisSnapshot) -> list[_Deduction]:
    if snapshot.total_records > 0:
        return []
    problem = QualityProblem(
        kind="missing_headcount",
        field="total_records",
        severity="critical",
        description="Snapshot has no employee records.",
    )
    return [_Deduction(problem, QUALITY_MISSING_HEADCOUNT_PENALTY)]


def _payroll_deductions(snapshot: AnalysisSnapshot) -> list[_Deduction]:
    if snapshot.total_records == 0 or snapshot.salary.mass != 0:
        return []
    zero_mass = QualityProblem(
        kind="zero_payroll_mass",
        field="salary.mass",
        severity="high",
        description=(
            f"Payroll mass is 0 for {snapshot.total_records} agents; "
            "no record carries a positive base salary."
        ),
    )
    unpaid_headcount = QualityProblem(
        kind="headcount_without_payroll",
        field="salary.mass",
        severity="critical",
        description="Headcount is positive while payroll mass is 0.",
    )
    return [
        _Deduction(zero_mass, QUALITY_ZERO_MASS_PENALTY),
        _Deduction(unpaid_headcount, QUALITY_HEADCOUNT_WITHOUT_MASS_PENALTY),
    ]


def _average_deductions(snapshot: AnalysisSnapshot) -> list[_Deduction]:
    salary = snapshot.salary
    expected_average = salary.mass / salary.salaried_count if salary.salaried_count else 0.0
    difference = abs(salary.average - expected_average)
    if difference <= abs(expected_average) * QUALITY_AVERAGE_TOLERANCE:
        return []
    problem = QualityProblem(
        kind="average_salary_mismatch",
        field="salary.average",
        severity="medium",
        description=(
            f"Average salary {salary.average:.2f} differs from mass / count "
            f"{expected_average:.2f} by more than 1%."
        ),
    )
    return [_Deduction(problem, QUALITY_AVERAGE_MISMATCH_PENALTY)]


def _reconciliation_notes(snapshot: AnalysisSnapshot) -> list[_Deduction]:
    salary = snapshot.salary
    if salary.excluded_count == 0 or salary.mass == 0:
        return []
    problem = QualityProblem(
        kind="salary_headcount_gap",
        field="salary.excluded_count",
        severity="info",
        description=(
            f"{salary.excluded_count} of {snapshot.total_records} agents have no positive "
            "salary; they count in headcount but not in payroll mass or average."
        ),
    )
    return [_Deduction(problem, 0)]
