"""Shared builders for roster records and snapshots in tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone

from core.types import (
    AnalysisSnapshot,
    CategoryBucket,
    EmployeeRecord,
    SalarySummary,
    SnapshotDraft,
    SourceFileInfo,
)

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def employee(**overrides: object) -> EmployeeRecord:
    """Build an employee record with realistic defaults."""
    record = EmployeeRecord(
        unit_name="Hacienda",
        contract_type="Planta Permanente",
        function="Administrativo",
        salary_scale="10",
        birth_date=date(1985, 3, 12),
        hire_date=date(2010, 6, 1),
        gender="F",
        base_salary=250000.0,
        department="Rentas",
        subdepartment="Fiscalización",
        position="Analista",
    )
    return replace(record, **overrides)


def salary(mass: float, salaried_count: int, excluded_count: int = 0) -> SalarySummary:
    """Build a consistent salary summary from mass and count."""
    average = mass / salaried_count if salaried_count else 0.0
    return SalarySummary(
        average=average,
        minimum=average,
        maximum=average,
        mass=mass,
        salaried_count=salaried_count,
        excluded_count=excluded_count,
    )


def draft(
    unit_id: str = "hacienda",
    total_records: int = 3,
    salary_summary: SalarySummary | None = None,
) -> SnapshotDraft:
    """Build a snapshot draft with one gender breakdown."""
    return SnapshotDraft(
        unit_id=unit_id,
        unit_name=unit_id.capitalize(),
        source=SourceFileInfo(
            file_name="roster.csv",
            record_count=total_records,
            ingested_at=FIXED_NOW,
        ),
        total_records=total_records,
        breakdowns={"genero": (CategoryBucket(label="F", count=total_records, percentage=100.0),)},
        salary=salary_summary or salary(300000.0, total_records),
    )


def snapshot(
    unit_id: str = "hacienda",
    version: int = 1,
    total_records: int = 3,
    salary_summary: SalarySummary | None = None,
) -> AnalysisSnapshot:
    """Build a current snapshot from a draft."""
    source = draft(unit_id, total_records, salary_summary)
    return AnalysisSnapshot(
        unit_id=source.unit_id,
        unit_name=source.unit_name,
        version=version,
        current=True,
        created_at=FIXED_NOW,
        source=source.source,
        total_records=source.total_records,
        breakdowns=source.breakdowns,
        salary=source.salary,
    )
