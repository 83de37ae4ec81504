"""Age and tenure range bucketing.

This module maps birth and hire dates into labeled ranges.
Ranges are half-open and lower-inclusive; missing dates get their own label.
"""

from __future__ import annotations

from datetime import date

from core.constants import (
    AGE_OPEN_RANGE_LABEL,
    AGE_RANGES,
    DAYS_PER_YEAR,
    TENURE_OPEN_RANGE_LABEL,
    TENURE_RANGES,
    UNSPECIFIED_LABEL,
)


def age_range(birth_date: date | None, reference_date: date) -> str:
    """Return the age range label for a birth date.

    Age is the calendar-year difference, so a person born in December
    counts a full year older from January 1st.

    Args:
        birth_date: Birth date, or None when missing.
        reference_date: Date the analysis is computed at.

    Returns:
        Age range label.
    """
    if birth_date is None:
        return UNSPECIFIED_LABEL
    age = reference_date.year - birth_date.year
    return _range_label(age, AGE_RANGES, AGE_OPEN_RANGE_LABEL)


def tenure_range(hire_date: date | None, reference_date: date) -> str:
    """Return the tenure range label for a hire date.

    Args:
        hire_date: Hire date, or None when missing.
        reference_date: Date the analysis is computed at.

    Returns:
        Tenure range label.
    """
    if hire_date is None:
        return UNSPECIFIED_LABEL
    years = (reference_date - hire_date).days / DAYS_PER_YEAR
    return _range_label(years, TENURE_RANGES, TENURE_OPEN_RANGE_LABEL)


def _range_label(
    value: float,
    ranges: tuple[tuple[int, str], ...],
    open_label: str,
) -> str:
    """Pick the first range whose exclusive upper bound exceeds value."""
    for upper_bound, label in ranges:
        if value < upper_bound:
            return label
    return open_label
