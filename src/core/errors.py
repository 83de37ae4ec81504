"""plantel exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class PlantelError(Exception):
    """Base exception for all plantel failures."""


class PlantelConfigError(PlantelError):
    """Raised for invalid runtime configuration."""


class PlantelIngestError(PlantelError):
    """Raised for roster source parsing and ingest failures."""


class EmptyInputError(PlantelIngestError):
    """Raised when an uploaded batch has no rows."""


class PlantelAnalyticsError(PlantelError):
    """Raised for invalid aggregation or reporting requests."""


class PlantelStoreError(PlantelError):
    """Raised for snapshot store and versioning failures."""


class PersistenceError(PlantelStoreError):
    """Raised when snapshot storage is unavailable or corrupt."""


class StaleVersionError(PlantelStoreError):
    """Raised when a commit loses the compare-and-swap on the current version."""


class VersionConflictError(PlantelStoreError):
    """Raised when a commit keeps losing the race after bounded retries."""


class SnapshotNotFoundError(PlantelStoreError):
    """Raised when a unit has no current snapshot or the version is unknown."""


class PlantelDependencyError(PlantelError):
    """Raised when an optional runtime dependency is missing."""


class PlantelRunSpecError(PlantelError):
    """Raised for invalid or unsupported run-spec configuration."""
