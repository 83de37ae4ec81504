"""Python SDK for roster analytics.

This module exposes the operations collaborators call: ingest rosters,
read current and historical snapshots, and compare or summarize units.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Iterable, Mapping

from analytics.reporting import (
    compare_snapshots,
    consolidate_dimension,
    summarize_units,
    unit_headline,
)
from core.config import PlantelConfig
from core.run_spec_execution import execute_run_spec_file
from core.types import (
    AnalysisSnapshot,
    ComparisonResult,
    FieldStatistics,
    IngestOptions,
    OverallSummary,
    SnapshotResult,
    UnitHeadline,
)
from ingest.pipeline import IngestPipelineRunner
from store.snapshot_store import SnapshotStore


class PlantelClient:
    """Primary SDK entry point for roster analytics workflows."""

    def __init__(self, config: PlantelConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or PlantelConfig.from_env()
        self._store = SnapshotStore(self._config)

    @property
    def config(self) -> PlantelConfig:
        """Runtime configuration used by this client."""
        return self._config

    def ingest(self, options: IngestOptions) -> list[SnapshotResult]:
        """Ingest a roster file into versioned unit snapshots.

        Args:
            options: Ingest options.

        Returns:
            One result per organizational unit in the roster.

        Raises:
            PlantelIngestError: If the roster cannot be read.
            EmptyInputError: If the roster has no rows.
        """
        return IngestPipelineRunner(self._config, store=self._store).run(options)

    def ingest_rows(
        self,
        rows: Iterable[Mapping[str, object]],
        unit_column: str | None = None,
        file_name: str = "upload",
    ) -> list[SnapshotResult]:
        """Ingest already-parsed roster rows.

        Args:
            rows: Raw rows keyed by column name.
            unit_column: Column naming the unit; config default when omitted.
            file_name: Source name recorded in snapshot metadata.

        Returns:
            One result per organizational unit in the rows.

        Raises:
            EmptyInputError: If rows is empty.
        """
        runner = IngestPipelineRunner(self._config, store=self._store)
        return runner.run_rows(rows, file_name, unit_column)

    def get_current(self, unit_id: str) -> AnalysisSnapshot:
        """Return a unit's current snapshot.

        Raises:
            SnapshotNotFoundError: If the unit has no snapshot.
        """
        return self._store.get_current(unit_id)

    def get_version(self, unit_id: str, version: int) -> AnalysisSnapshot:
        """Return one historical snapshot of a unit.

        Raises:
            SnapshotNotFoundError: If the version does not exist.
        """
        return self._store.load_version(unit_id, version)

    def get_history(self, unit_id: str) -> list[AnalysisSnapshot]:
        """Return every snapshot of a unit, newest first."""
        return self._store.list_versions(unit_id)

    def compare(self, first_unit_id: str, second_unit_id: str) -> ComparisonResult:
        """Compare the current snapshots of two units.

        Raises:
            SnapshotNotFoundError: If either unit has no snapshot.
        """
        first = self._store.get_current(first_unit_id)
        second = self._store.get_current(second_unit_id)
        return compare_snapshots(first, second)

    def list_units(self) -> list[UnitHeadline]:
        """Return headlines of every unit's current snapshot, by name."""
        headlines = [unit_headline(snapshot) for snapshot in self._store.list_current()]
        return sorted(headlines, key=lambda item: (item.unit_name, item.unit_id))

    def summarize(self) -> OverallSummary:
        """Return totals and size classes across all units."""
        return summarize_units(self._store.list_current())

    def field_statistics(self, dimension: str) -> FieldStatistics:
        """Consolidate one dimension across all current snapshots.

        Raises:
            PlantelAnalyticsError: If dimension is unsupported.
        """
        return consolidate_dimension(self._store.list_current(), dimension)

    def with_data_root(self, data_root: str) -> "PlantelClient":
        """Clone the client with a different local data root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return PlantelClient(replace(self._config, data_root=resolved_root))

    def run_spec(self, spec_file: str) -> tuple[str, ...]:
        """Execute a YAML run-spec through the shared execution engine.

        Args:
            spec_file: Path to YAML run-spec file.

        Returns:
            Ordered command output lines.
        """
        return execute_run_spec_file(self, spec_file)
