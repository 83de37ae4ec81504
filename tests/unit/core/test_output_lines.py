"""Unit tests for printable result rows."""

from __future__ import annotations

from dataclasses import replace

from core.output_lines import format_history_row, format_snapshot, format_snapshot_result
from core.types import SnapshotResult
from tests.roster_factories import snapshot


def test_format_snapshot_result_reports_failure_kind() -> None:
    """Failed units should print the error class and message."""
    result = SnapshotResult(
        unit_id="salud",
        unit_name="Salud",
        succeeded=False,
        record_count=2,
        error_kind="VersionConflictError",
        error_message="retries exhausted",
    )

    line = format_snapshot_result(result)

    assert line == "salud\tfailed\t2\tVersionConflictError: retries exhausted"


def test_format_snapshot_lists_each_bucket() -> None:
    """Snapshot output should contain the headline and one row per bucket."""
    lines = format_snapshot(snapshot())

    assert lines[1:] == ("genero\tF\t3\t100.00%",)


def test_format_history_row_marks_superseded_versions() -> None:
    """History rows should flag superseded snapshots with a dash."""
    row = format_history_row(replace(snapshot(version=1), current=False))

    assert row.split("\t")[:2] == ["1", "-"]
