"""Ingest orchestration for roster batches.

This module partitions one uploaded roster by organizational unit and
runs normalize, aggregate, version, and validate for each partition.
Partitions run in parallel and fail independently.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping

from analytics.quality_validation import validate_snapshot
from analytics.snapshot_builder import build_snapshot_draft
from core.config import PlantelConfig
from core.constants import COLUMN_UNIT, ROSTER_COLUMNS
from core.errors import EmptyInputError, PlantelStoreError
from core.logging_config import get_logger
from core.types import IngestOptions, QualityReport, SnapshotResult
from ingest.input_reader import read_roster
from ingest.row_normalizer import (
    build_unit_id,
    normalize_column_name,
    normalize_row,
    normalize_row_keys,
    resolve_unit_name,
)
from store.snapshot_store import SnapshotStore
from store.versioning import CommitOutcome, VersioningManager

_LOGGER = get_logger(__name__)

RawRow = Mapping[str, object]


@dataclass(frozen=True)
class UnitPartition:
    """Rows of one organizational unit within a batch."""

    unit_id: str
    unit_name: str
    rows: tuple[RawRow, ...]


class IngestPipelineRunner:
    """Runs one roster batch through the analysis pipeline."""

    def __init__(
        self,
        config: PlantelConfig,
        store: SnapshotStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config
        self._store = store or SnapshotStore(config)
        self._clock = clock or _utc_now
        self._versioning = VersioningManager(
            self._store,
            max_attempts=config.commit_max_retries,
            clock=self._clock,
        )

    def run(self, options: IngestOptions) -> list[SnapshotResult]:
        """Read a roster source and ingest every unit in it."""
        roster = read_roster(options.source_uri, self._config)
        return self.run_rows(roster.rows, roster.file_name, options.unit_column)

    def run_rows(
        self,
        rows: Iterable[RawRow],
        file_name: str,
        unit_column: str | None = None,
    ) -> list[SnapshotResult]:
        """Ingest raw roster rows.

        Args:
            rows: Raw rows keyed by column name; names are trimmed and
                upper-cased before use.
            file_name: Source file name recorded in snapshot metadata.
            unit_column: Column naming the unit; config default when omitted.

        Returns:
            One result per unit partition, in first-appearance order.

        Raises:
            EmptyInputError: If the batch has no rows.
        """
        row_list = [normalize_row_keys(row) for row in rows]
        if not row_list:
            raise EmptyInputError(
                f"Roster '{file_name}' has no rows. Upload a file with at least one employee."
            )
        resolved_column = normalize_column_name(unit_column or self._config.unit_column)
        _warn_missing_columns(row_list[0], resolved_column, file_name)
        partitions = partition_rows(row_list, resolved_column)
        ingested_at = self._clock()
        with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
            results = list(
                executor.map(
                    lambda partition: self._process_partition(
                        partition, resolved_column, file_name, ingested_at
                    ),
                    partitions,
                )
            )
        _LOGGER.info(
            "ingest_completed",
            source=file_name,
            row_count=len(row_list),
            unit_count=len(results),
            failed_count=sum(1 for result in results if not result.succeeded),
        )
        return results

    def _process_partition(
        self,
        partition: UnitPartition,
        unit_column: str,
        file_name: str,
        ingested_at: datetime,
    ) -> SnapshotResult:
        records = [normalize_row(row, unit_column) for row in partition.rows]
        draft = build_snapshot_draft(
            unit_id=partition.unit_id,
            unit_name=partition.unit_name,
            records=records,
            file_name=file_name,
            ingested_at=ingested_at,
        )
        try:
            outcome = self._versioning.commit(draft)
        except PlantelStoreError as error:
            _LOGGER.error(
                "partition_failed",
                unit_id=partition.unit_id,
                error_kind=type(error).__name__,
                error=str(error),
            )
            return SnapshotResult(
                unit_id=partition.unit_id,
                unit_name=partition.unit_name,
                succeeded=False,
                record_count=len(records),
                error_kind=type(error).__name__,
                error_message=str(error),
            )
        report = self._annotate_quality(outcome)
        return SnapshotResult(
            unit_id=partition.unit_id,
            unit_name=partition.unit_name,
            succeeded=True,
            record_count=len(records),
            version=outcome.snapshot.version,
            trend=outcome.snapshot.trend,
            quality=report,
        )

    def _annotate_quality(self, outcome: CommitOutcome) -> QualityReport:
        """Validate a committed snapshot and store the report beside it."""
        snapshot = outcome.snapshot
        report = validate_snapshot(snapshot, validated_at=self._clock())
        try:
            self._store.save_quality_report(snapshot.unit_id, snapshot.version, report)
        except PlantelStoreError as error:
            _LOGGER.warning(
                "quality_report_not_saved",
                unit_id=snapshot.unit_id,
                version=snapshot.version,
                error=str(error),
            )
        _LOGGER.info(
            "quality_validated",
            unit_id=snapshot.unit_id,
            version=snapshot.version,
            score=report.score,
            problem_count=len(report.problems),
        )
        return report


def partition_rows(rows: list[RawRow], unit_column: str) -> list[UnitPartition]:
    """Group rows by unit id, keeping first-appearance order.

    Names that differ only in case or spacing share one unit id; the
    first name seen is used for display.

    Args:
        rows: Raw roster rows.
        unit_column: Column naming the unit.

    Returns:
        One partition per unit.
    """
    names: dict[str, str] = {}
    grouped: dict[str, list[RawRow]] = {}
    for row in rows:
        unit_name = resolve_unit_name(row, unit_column)
        unit_id = build_unit_id(unit_name)
        names.setdefault(unit_id, unit_name)
        grouped.setdefault(unit_id, []).append(row)
    return [
        UnitPartition(unit_id=unit_id, unit_name=names[unit_id], rows=tuple(unit_rows))
        for unit_id, unit_rows in grouped.items()
    ]


def _warn_missing_columns(first_row: RawRow, unit_column: str, file_name: str) -> None:
    expected = {unit_column, *(column for column in ROSTER_COLUMNS if column != COLUMN_UNIT)}
    missing = sorted(expected - set(first_row))
    if missing:
        _LOGGER.warning("roster_columns_missing", source=file_name, columns=missing)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
