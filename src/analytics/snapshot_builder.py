"""Snapshot draft composition.

This module assembles one unit's breakdowns and salary summary
into an unversioned draft. It performs no I/O.
"""

from __future__ import annotations

from datetime import datetime

from analytics.aggregation import aggregate_records, dimension_labeler
from analytics.salary_statistics import summarize_salaries
from core.constants import SUPPORTED_DIMENSIONS
from core.types import EmployeeRecord, SnapshotDraft, SourceFileInfo


def build_snapshot_draft(
    unit_id: str,
    unit_name: str,
    records: list[EmployeeRecord],
    file_name: str,
    ingested_at: datetime,
) -> SnapshotDraft:
    """Compose an unpersisted snapshot draft for one unit.

    Args:
        unit_id: Stable unit identifier.
        unit_name: Display name of the unit.
        records: The unit's normalized records.
        file_name: Source roster file name.
        ingested_at: Ingestion timestamp; its date anchors age and tenure.

    Returns:
        Snapshot draft with every supported dimension populated.
    """
    reference_date = ingested_at.date()
    breakdowns = {
        dimension: aggregate_records(records, dimension_labeler(dimension, reference_date))
        for dimension in SUPPORTED_DIMENSIONS
    }
    return SnapshotDraft(
        unit_id=unit_id,
        unit_name=unit_name,
        source=SourceFileInfo(
            file_name=file_name,
            record_count=len(records),
            ingested_at=ingested_at,
        ),
        total_records=len(records),
        breakdowns=breakdowns,
        salary=summarize_salaries(records),
    )
