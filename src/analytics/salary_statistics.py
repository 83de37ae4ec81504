"""Salary statistics over positive base salaries.

Zero or unparseable salaries stay in the unit headcount but are
excluded from mass, average, minimum, and maximum.
"""

from __future__ import annotations

from core.types import EmployeeRecord, SalarySummary


def summarize_salaries(records: list[EmployeeRecord]) -> SalarySummary:
    """Compute the salary summary for a set of records.

    Args:
        records: Normalized employee records.

    Returns:
        Summary over strictly positive salaries; all zeros when none exist.
    """
    salaries = [record.base_salary for record in records if record.base_salary > 0]
    excluded_count = len(records) - len(salaries)
    if not salaries:
        return SalarySummary(
            average=0.0,
            minimum=0.0,
            maximum=0.0,
            mass=0.0,
            salaried_count=0,
            excluded_count=excluded_count,
        )
    mass = sum(salaries)
    return SalarySummary(
        average=mass / len(salaries),
        minimum=min(salaries),
        maximum=max(salaries),
        mass=mass,
        salaried_count=len(salaries),
        excluded_count=excluded_count,
    )
