"""Shared typed models.

This module defines immutable data models used by ingest, analytics,
store, and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Mapping


@dataclass(frozen=True)
class EmployeeRecord:
    """Normalized roster row for one employee.

    Categorical fields never hold blanks: absent values carry the
    unspecified label so every record counts in every breakdown.

    Attributes:
        unit_name: Organizational unit (secretariat) name.
        contract_type: Contract type label.
        function: Function or role label.
        salary_scale: Salary scale label.
        birth_date: Birth date when present and parseable.
        hire_date: Hire date when present and parseable.
        gender: Gender label.
        base_salary: Base salary; 0 when absent or unparseable.
        department: Department label.
        subdepartment: Subdepartment label.
        position: Position title.
    """

    unit_name: str
    contract_type: str
    function: str
    salary_scale: str
    birth_date: date | None
    hire_date: date | None
    gender: str
    base_salary: float
    department: str
    subdepartment: str
    position: str


@dataclass(frozen=True)
class CategoryBucket:
    """One labeled count within a categorical breakdown.

    Attributes:
        label: Category label.
        count: Number of records in the category.
        percentage: Share of the unit headcount, two decimals.
    """

    label: str
    count: int
    percentage: float


@dataclass(frozen=True)
class SalarySummary:
    """Salary statistics over strictly positive salaries.

    Attributes:
        average: Mean positive salary.
        minimum: Lowest positive salary.
        maximum: Highest positive salary.
        mass: Total payroll mass.
        salaried_count: Records contributing to the summary.
        excluded_count: Records with zero or unparseable salary.
    """

    average: float
    minimum: float
    maximum: float
    mass: float
    salaried_count: int = 0
    excluded_count: int = 0


@dataclass(frozen=True)
class SourceFileInfo:
    """Metadata about the roster file a snapshot came from.

    Attributes:
        file_name: Original file name or URI.
        record_count: Rows belonging to the unit.
        ingested_at: UTC ingestion timestamp.
    """

    file_name: str
    record_count: int
    ingested_at: datetime


@dataclass(frozen=True)
class TrendDeltas:
    """Percentage changes against the previous current snapshot.

    Attributes:
        previous_version: Version the deltas were computed against.
        headcount: Headcount delta percentage.
        payroll_mass: Payroll mass delta percentage.
        average_salary: Average salary delta percentage.
    """

    previous_version: int
    headcount: float
    payroll_mass: float
    average_salary: float


@dataclass(frozen=True)
class QualityProblem:
    """One problem found while validating a snapshot.

    Attributes:
        kind: Stable problem identifier.
        field: Snapshot field the problem refers to.
        severity: One of critical, high, medium, info.
        description: Human-readable explanation.
    """

    kind: str
    field: str
    severity: str
    description: str


@dataclass(frozen=True)
class QualityReport:
    """Quality score and itemized problems for a snapshot.

    Attributes:
        score: Heuristic confidence in [0, 100].
        problems: Problems in discovery order.
        validated_at: UTC validation timestamp.
    """

    score: int
    problems: tuple[QualityProblem, ...]
    validated_at: datetime


@dataclass(frozen=True)
class SnapshotDraft:
    """Unpersisted analysis for one unit before versioning.

    Attributes:
        unit_id: Stable unit identifier.
        unit_name: Display name of the unit.
        source: Source file metadata.
        total_records: Unit headcount.
        breakdowns: Buckets per dimension name.
        salary: Salary summary.
    """

    unit_id: str
    unit_name: str
    source: SourceFileInfo
    total_records: int
    breakdowns: Mapping[str, tuple[CategoryBucket, ...]]
    salary: SalarySummary


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Committed, versioned analysis for one unit.

    Attributes:
        unit_id: Stable unit identifier.
        unit_name: Display name of the unit.
        version: One-based version within the unit.
        current: Whether this is the unit's authoritative snapshot.
        created_at: UTC commit timestamp.
        source: Source file metadata.
        total_records: Unit headcount.
        breakdowns: Buckets per dimension name.
        salary: Salary summary.
        trend: Deltas against the previous version, if any.
        quality: Quality annotation written after commit, if any.
    """

    unit_id: str
    unit_name: str
    version: int
    current: bool
    created_at: datetime
    source: SourceFileInfo
    total_records: int
    breakdowns: Mapping[str, tuple[CategoryBucket, ...]]
    salary: SalarySummary
    trend: TrendDeltas | None = None
    quality: QualityReport | None = None


@dataclass(frozen=True)
class SnapshotResult:
    """Per-unit outcome of one ingestion batch.

    Attributes:
        unit_id: Stable unit identifier.
        unit_name: Display name of the unit.
        succeeded: Whether the unit snapshot was committed.
        record_count: Rows belonging to the unit.
        version: Committed version when successful.
        trend: Trend deltas when a previous version existed.
        quality: Quality report when validation ran.
        error_kind: Exception class name on failure.
        error_message: Failure description.
    """

    unit_id: str
    unit_name: str
    succeeded: bool
    record_count: int
    version: int | None = None
    trend: TrendDeltas | None = None
    quality: QualityReport | None = None
    error_kind: str | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class RosterFile:
    """Raw roster rows loaded from one tabular source.

    Attributes:
        file_name: Source file name or URI.
        rows: Raw rows keyed by upper-cased column name.
    """

    file_name: str
    rows: tuple[Mapping[str, object], ...]


@dataclass(frozen=True)
class IngestOptions:
    """Ingest command options.

    Attributes:
        source_uri: Roster file path or S3 URI.
        unit_column: Optional override of the unit column.
    """

    source_uri: str
    unit_column: str | None = None


@dataclass(frozen=True)
class UnitHeadline:
    """Headline figures of a unit's current snapshot.

    Attributes:
        unit_id: Stable unit identifier.
        unit_name: Display name of the unit.
        version: Current version number.
        headcount: Unit headcount.
        average_salary: Mean positive salary.
        payroll_mass: Total payroll mass.
        updated_at: Commit timestamp of the current snapshot.
    """

    unit_id: str
    unit_name: str
    version: int
    headcount: int
    average_salary: float
    payroll_mass: float
    updated_at: datetime


@dataclass(frozen=True)
class ComparisonResult:
    """Side-by-side comparison of two units' current snapshots.

    Attributes:
        first: Headline of the first unit.
        second: Headline of the second unit.
        headcount_difference: First minus second headcount.
        average_salary_difference: First minus second average salary.
        payroll_mass_difference: First minus second payroll mass.
    """

    first: UnitHeadline
    second: UnitHeadline
    headcount_difference: int
    average_salary_difference: float
    payroll_mass_difference: float


@dataclass(frozen=True)
class OverallSummary:
    """Totals across every unit's current snapshot.

    Attributes:
        unit_count: Units with a current snapshot.
        total_headcount: Sum of unit headcounts.
        total_payroll_mass: Sum of unit payroll masses.
        size_classes: Unit counts per size class name.
        units: Unit headlines by descending headcount.
    """

    unit_count: int
    total_headcount: int
    total_payroll_mass: float
    size_classes: Mapping[str, int] = field(default_factory=dict)
    units: tuple[UnitHeadline, ...] = ()


@dataclass(frozen=True)
class FieldStatistics:
    """One dimension consolidated over all current snapshots.

    Attributes:
        dimension: Dimension name.
        total: Sum of bucket counts.
        buckets: Consolidated buckets by descending count.
    """

    dimension: str
    total: int
    buckets: tuple[CategoryBucket, ...]
