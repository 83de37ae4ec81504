"""Unit tests for snapshot draft composition."""

from __future__ import annotations

from analytics.snapshot_builder import build_snapshot_draft
from core.constants import SUPPORTED_DIMENSIONS
from tests.roster_factories import FIXED_NOW, employee


def _build(records):
    return build_snapshot_draft(
        unit_id="hacienda",
        unit_name="Hacienda",
        records=records,
        file_name="roster.csv",
        ingested_at=FIXED_NOW,
    )


def test_build_snapshot_draft_populates_every_dimension() -> None:
    """Drafts should carry one breakdown per supported dimension."""
    snapshot_draft = _build([employee(), employee(gender="M")])

    assert tuple(snapshot_draft.breakdowns) == SUPPORTED_DIMENSIONS


def test_build_snapshot_draft_percentages_sum_to_hundred() -> None:
    """Each breakdown should account for the whole headcount."""
    snapshot_draft = _build([employee(), employee(gender="M"), employee(gender="X")])

    total = sum(bucket.percentage for bucket in snapshot_draft.breakdowns["genero"])

    assert abs(total - 100.0) <= 0.1


def test_build_snapshot_draft_records_source_metadata() -> None:
    """Source metadata should carry file name and record count."""
    snapshot_draft = _build([employee(), employee()])

    assert (snapshot_draft.source.file_name, snapshot_draft.source.record_count) == (
        "roster.csv",
        2,
    )
