"""Period-over-period trend deltas.

This module compares a new snapshot draft against the unit's
previous current snapshot.
"""

from __future__ import annotations

from core.constants import PERCENTAGE_PRECISION
from core.types import AnalysisSnapshot, SnapshotDraft, TrendDeltas


def compute_trend(previous: AnalysisSnapshot, draft: SnapshotDraft) -> TrendDeltas:
    """Compute headcount, mass, and average salary deltas.

    Args:
        previous: Snapshot being superseded.
        draft: Incoming snapshot draft.

    Returns:
        Percentage deltas rounded to two decimals.
    """
    return TrendDeltas(
        previous_version=previous.version,
        headcount=percentage_delta(previous.total_records, draft.total_records),
        payroll_mass=percentage_delta(previous.salary.mass, draft.salary.mass),
        average_salary=percentage_delta(previous.salary.average, draft.salary.average),
    )


def percentage_delta(previous_value: float, current_value: float) -> float:
    """Return the percentage change from previous_value to current_value.

    A zero baseline yields 100 when the value grew from nothing and 0 otherwise.
    """
    if previous_value == 0:
        return 100.0 if current_value > 0 else 0.0
    change = (current_value - previous_value) / previous_value * 100
    return round(change, PERCENTAGE_PRECISION)
