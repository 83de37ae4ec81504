"""Roster row normalization.

This module converts raw tabular rows into typed employee records.
It never fails: blanks become the unspecified label, unparseable dates
become None, and unparseable salaries become 0.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
import math
import re
from typing import Mapping

from core.constants import (
    COLUMN_BASE_SALARY,
    COLUMN_BIRTH_DATE,
    COLUMN_CONTRACT_TYPE,
    COLUMN_DEPARTMENT,
    COLUMN_FUNCTION,
    COLUMN_GENDER,
    COLUMN_HIRE_DATE,
    COLUMN_POSITION,
    COLUMN_SALARY_SCALE,
    COLUMN_SUBDEPARTMENT,
    ROSTER_DATE_FORMATS,
    SPREADSHEET_EPOCH,
    SPREADSHEET_MAX_SERIAL,
    UNSPECIFIED_LABEL,
    UNSPECIFIED_UNIT_LABEL,
)
from core.types import EmployeeRecord

_SEPARATOR_PATTERN = re.compile(r"[\s/\\]+")


def normalize_row(raw_row: Mapping[str, object], unit_column: str) -> EmployeeRecord:
    """Normalize one raw roster row.

    Args:
        raw_row: Column name to raw cell value.
        unit_column: Column holding the organizational unit name.

    Returns:
        Employee record with documented defaults applied.
    """
    return EmployeeRecord(
        unit_name=resolve_unit_name(raw_row, unit_column),
        contract_type=_label(raw_row.get(COLUMN_CONTRACT_TYPE)),
        function=_label(raw_row.get(COLUMN_FUNCTION)),
        salary_scale=_label(raw_row.get(COLUMN_SALARY_SCALE)),
        birth_date=parse_roster_date(raw_row.get(COLUMN_BIRTH_DATE)),
        hire_date=parse_roster_date(raw_row.get(COLUMN_HIRE_DATE)),
        gender=_label(raw_row.get(COLUMN_GENDER)),
        base_salary=parse_salary(raw_row.get(COLUMN_BASE_SALARY)),
        department=_label(raw_row.get(COLUMN_DEPARTMENT)),
        subdepartment=_label(raw_row.get(COLUMN_SUBDEPARTMENT)),
        position=_label(raw_row.get(COLUMN_POSITION)),
    )


def normalize_column_name(name: object) -> str:
    """Return a header in canonical form: trimmed and upper-cased."""
    return str(name).strip().upper()


def normalize_row_keys(raw_row: Mapping[str, object]) -> dict[str, object]:
    """Return a copy of a row keyed by canonical column names."""
    return {normalize_column_name(column): value for column, value in raw_row.items()}


def resolve_unit_name(raw_row: Mapping[str, object], unit_column: str) -> str:
    """Return the unit name of a row, defaulting blanks."""
    return _label(raw_row.get(unit_column), UNSPECIFIED_UNIT_LABEL)


def build_unit_id(unit_name: str) -> str:
    """Derive the stable unit id from a unit name.

    Args:
        unit_name: Display name, e.g. "Secretaría de Hacienda".

    Returns:
        Lowercase id with whitespace and path separator runs replaced by dashes.
    """
    return _SEPARATOR_PATTERN.sub("-", unit_name.strip().lower())


def parse_roster_date(value: object) -> date | None:
    """Parse a date cell.

    Accepts native dates, spreadsheet serial day numbers, and the
    string formats listed in ROSTER_DATE_FORMATS.

    Args:
        value: Raw cell value.

    Returns:
        Parsed date, or None when absent or unparseable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return None if _is_missing_timestamp(value) else value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return _date_from_serial(float(value))
    if isinstance(value, str):
        return _date_from_text(value.strip())
    return None


def parse_salary(value: object) -> float:
    """Parse a salary cell into a float.

    Strings may use "." or "," as the decimal separator; a comma marks
    the Spanish format where "." groups thousands.

    Args:
        value: Raw cell value.

    Returns:
        Parsed salary, or 0.0 when absent or unparseable.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return _finite_or_zero(float(value))
    text = str(value).strip().replace("$", "").replace(" ", "")
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        return _finite_or_zero(float(text))
    except ValueError:
        return 0.0


def _label(value: object, default_label: str = UNSPECIFIED_LABEL) -> str:
    if value is None:
        return default_label
    if isinstance(value, float):
        if math.isnan(value):
            return default_label
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    return text if text else default_label


def _date_from_serial(serial: float) -> date | None:
    if math.isnan(serial) or serial < 1 or serial > SPREADSHEET_MAX_SERIAL:
        return None
    return SPREADSHEET_EPOCH + timedelta(days=int(serial))


def _date_from_text(text: str) -> date | None:
    if not text:
        return None
    for date_format in ROSTER_DATE_FORMATS:
        try:
            return datetime.strptime(text, date_format).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _is_missing_timestamp(value: datetime) -> bool:
    # pandas.NaT is a datetime subclass that compares unequal to itself.
    return value != value


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0
