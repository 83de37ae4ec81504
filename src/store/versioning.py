"""Snapshot versioning manager.

This module turns a snapshot draft into the unit's next current
version. Each attempt re-reads the current snapshot, derives the next
version and trend deltas from it, and commits through the store's
compare-and-swap; lost races are retried a bounded number of times.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from analytics.trends import compute_trend
from core.errors import StaleVersionError, VersionConflictError
from core.logging_config import get_logger
from core.types import AnalysisSnapshot, SnapshotDraft
from store.snapshot_store import SnapshotStore

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CommitOutcome:
    """Result of a successful versioning transition.

    Attributes:
        snapshot: Newly committed current snapshot.
        previous: Snapshot that was superseded, if any.
        attempts: Number of attempts the commit needed.
    """

    snapshot: AnalysisSnapshot
    previous: AnalysisSnapshot | None
    attempts: int


class VersioningManager:
    """Assigns versions and flips the current flag for unit snapshots."""

    def __init__(
        self,
        store: SnapshotStore,
        max_attempts: int,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._max_attempts = max_attempts
        self._clock = clock or _utc_now

    def commit(self, draft: SnapshotDraft) -> CommitOutcome:
        """Commit a draft as the unit's next current snapshot.

        Args:
            draft: Unversioned snapshot draft.

        Returns:
            Commit outcome with the new and superseded snapshots.

        Raises:
            VersionConflictError: If every attempt lost the race.
            PersistenceError: If storage fails.
        """
        for attempt in range(1, self._max_attempts + 1):
            previous = self._store.read_current(draft.unit_id)
            snapshot = self._next_snapshot(draft, previous)
            expected_version = previous.version if previous else None
            try:
                self._store.commit_snapshot(snapshot, expected_version)
            except StaleVersionError as error:
                _LOGGER.warning(
                    "commit_conflict",
                    unit_id=draft.unit_id,
                    attempt=attempt,
                    expected_version=expected_version,
                    reason=str(error),
                )
                continue
            return CommitOutcome(snapshot=snapshot, previous=previous, attempts=attempt)
        raise VersionConflictError(
            f"Failed to commit a new snapshot for unit '{draft.unit_id}' after "
            f"{self._max_attempts} attempts: concurrent ingestions kept winning. "
            "Retry the unit later or raise PLANTEL_COMMIT_MAX_RETRIES."
        )

    def _next_snapshot(
        self,
        draft: SnapshotDraft,
        previous: AnalysisSnapshot | None,
    ) -> AnalysisSnapshot:
        return AnalysisSnapshot(
            unit_id=draft.unit_id,
            unit_name=draft.unit_name,
            version=previous.version + 1 if previous else 1,
            current=True,
            created_at=self._clock(),
            source=draft.source,
            total_records=draft.total_records,
            breakdowns=draft.breakdowns,
            salary=draft.salary,
            trend=compute_trend(previous, draft) if previous else None,
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
