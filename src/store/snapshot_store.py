"""Snapshot store and unit catalogs.

This module persists immutable, versioned analysis snapshots per unit.
Each unit catalog holds the single current-version pointer; swapping it
with an atomic file replace is what flips the current flag.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
import shutil
import threading
from typing import Any
import uuid

from core.config import PlantelConfig
from core.constants import (
    CATALOG_FILE_NAME,
    QUALITY_FILE_NAME,
    SNAPSHOT_FILE_NAME,
    UNITS_DIR_NAME,
    VERSIONS_DIR_NAME,
)
from core.errors import (
    PersistenceError,
    PlantelStoreError,
    SnapshotNotFoundError,
    StaleVersionError,
)
from core.logging_config import get_logger
from core.types import AnalysisSnapshot, QualityReport
from store.snapshot_codec import (
    quality_from_payload,
    quality_to_payload,
    snapshot_from_payload,
    snapshot_to_payload,
)

_LOGGER = get_logger(__name__)
_UNIT_LOCKS: dict[str, threading.Lock] = {}
_UNIT_LOCKS_GUARD = threading.Lock()


class SnapshotStore:
    """Filesystem-backed append-only snapshot store.

    Version directories are published by renaming a fully written staging
    directory, so two writers racing for the same version number cannot
    both succeed and a published version is never partial.
    """

    def __init__(self, config: PlantelConfig) -> None:
        """Initialize snapshot store from config.

        Args:
            config: Runtime configuration.

        Raises:
            PersistenceError: If the data root cannot be created.
        """
        self._units_root = config.data_root / UNITS_DIR_NAME
        try:
            self._units_root.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise PersistenceError(
                f"Failed to initialize snapshot store at {self._units_root}: {error}. "
                "Check PLANTEL_DATA_ROOT and write permissions."
            ) from error

    def read_current(self, unit_id: str) -> AnalysisSnapshot | None:
        """Return the unit's current snapshot, or None when it has none.

        Raises:
            PersistenceError: If stored files are unreadable.
        """
        catalog = self._read_catalog(unit_id)
        if catalog is None or catalog["current_version"] is None:
            return None
        return self._load_snapshot(unit_id, int(catalog["current_version"]), current=True)

    def get_current(self, unit_id: str) -> AnalysisSnapshot:
        """Return the unit's current snapshot.

        Args:
            unit_id: Unit identifier.

        Returns:
            Current snapshot.

        Raises:
            SnapshotNotFoundError: If the unit has no snapshot.
        """
        snapshot = self.read_current(unit_id)
        if snapshot is None:
            raise SnapshotNotFoundError(
                f"No current snapshot exists for unit '{unit_id}'. "
                "Ingest a roster for this unit first."
            )
        return snapshot

    def load_version(self, unit_id: str, version: int) -> AnalysisSnapshot:
        """Load one historical snapshot.

        Args:
            unit_id: Unit identifier.
            version: Version number.

        Returns:
            Snapshot with its current flag resolved from the catalog.

        Raises:
            SnapshotNotFoundError: If the unit or version is unknown.
        """
        catalog = self._read_catalog(unit_id)
        known_versions = _catalog_versions(catalog)
        if version not in known_versions:
            raise SnapshotNotFoundError(
                f"Version {version} not found for unit '{unit_id}'. "
                "Use the history listing to discover valid versions."
            )
        current_version = catalog["current_version"] if catalog else None
        return self._load_snapshot(unit_id, version, current=version == current_version)

    def list_versions(self, unit_id: str) -> list[AnalysisSnapshot]:
        """List every snapshot of a unit, newest first.

        Args:
            unit_id: Unit identifier.

        Returns:
            Snapshots ordered by descending version; empty for unknown units.
        """
        catalog = self._read_catalog(unit_id)
        if catalog is None:
            return []
        current_version = catalog["current_version"]
        return [
            self._load_snapshot(unit_id, version, current=version == current_version)
            for version in sorted(_catalog_versions(catalog), reverse=True)
        ]

    def list_unit_ids(self) -> list[str]:
        """Return ids of units that have a catalog, sorted."""
        return sorted(
            path.parent.name for path in self._units_root.glob(f"*/{CATALOG_FILE_NAME}")
        )

    def list_current(self) -> list[AnalysisSnapshot]:
        """Return the current snapshot of every unit."""
        snapshots = [self.read_current(unit_id) for unit_id in self.list_unit_ids()]
        return [snapshot for snapshot in snapshots if snapshot is not None]

    def commit_snapshot(self, snapshot: AnalysisSnapshot, expected_version: int | None) -> None:
        """Append a snapshot and make it current in one compare-and-swap.

        Args:
            snapshot: New snapshot; its version must follow expected_version.
            expected_version: Current version observed by the caller.

        Raises:
            StaleVersionError: If the current version moved since it was read.
            PersistenceError: If files cannot be written.
        """
        unit_id = snapshot.unit_id
        if snapshot.version != (expected_version or 0) + 1:
            raise PlantelStoreError(
                f"Snapshot version {snapshot.version} does not follow "
                f"{expected_version} for unit '{unit_id}'."
            )
        with _unit_lock(self._unit_root(unit_id)):
            catalog = self._read_catalog(unit_id) or _empty_catalog(snapshot)
            if catalog["current_version"] != expected_version:
                raise StaleVersionError(
                    f"Unit '{unit_id}' moved to version {catalog['current_version']} "
                    f"while committing on top of {expected_version}."
                )
            version_dir = self._claim_version_dir(catalog, snapshot)
            try:
                _write_json_atomic(
                    self._unit_root(unit_id) / CATALOG_FILE_NAME,
                    _advance_catalog(catalog, snapshot),
                )
            except PersistenceError:
                shutil.rmtree(version_dir, ignore_errors=True)
                raise
        _LOGGER.info(
            "snapshot_committed",
            unit_id=unit_id,
            version=snapshot.version,
            previous_version=expected_version,
        )

    def save_quality_report(self, unit_id: str, version: int, report: QualityReport) -> None:
        """Attach a quality report to a committed snapshot.

        Raises:
            SnapshotNotFoundError: If the version does not exist.
            PersistenceError: If the report cannot be written.
        """
        version_dir = self._version_dir(unit_id, version)
        if not (version_dir / SNAPSHOT_FILE_NAME).exists():
            raise SnapshotNotFoundError(
                f"Cannot annotate unit '{unit_id}' version {version}: snapshot is missing."
            )
        _write_json_atomic(version_dir / QUALITY_FILE_NAME, quality_to_payload(report))

    def _claim_version_dir(self, catalog: dict[str, Any], snapshot: AnalysisSnapshot) -> Path:
        """Publish the snapshot's version directory in one rename.

        The payload is written into a hidden staging directory first, so a
        claimed version directory always holds a complete snapshot.

        Raises:
            StaleVersionError: If the version directory already exists.
            PersistenceError: If the directory cannot be written.
        """
        unit_id = snapshot.unit_id
        version_dir = self._version_dir(unit_id, snapshot.version)
        staging_dir = version_dir.with_name(f".{version_dir.name}.{uuid.uuid4().hex}.tmp")
        try:
            staging_dir.mkdir(parents=True)
            _write_json_atomic(staging_dir / SNAPSHOT_FILE_NAME, snapshot_to_payload(snapshot))
            os.rename(staging_dir, version_dir)
        except OSError as error:
            shutil.rmtree(staging_dir, ignore_errors=True)
            if not version_dir.exists():
                raise PersistenceError(
                    f"Failed to create snapshot directory {version_dir}: {error}. "
                    "Check write permissions and available disk space."
                ) from error
            self._adopt_orphan_version(catalog, unit_id, snapshot.version)
            raise StaleVersionError(
                f"Version {snapshot.version} of unit '{unit_id}' was claimed by another writer."
            ) from error
        except PersistenceError:
            shutil.rmtree(staging_dir, ignore_errors=True)
            raise
        return version_dir

    def _adopt_orphan_version(self, catalog: dict[str, Any], unit_id: str, version: int) -> None:
        """Make a published but uncataloged version current.

        A writer that dies between publishing its version directory and
        swapping the catalog leaves a complete snapshot behind. Adopting it
        lets the next commit attempt build on top of that version.

        Raises:
            PersistenceError: If the orphan cannot be read or the catalog written.
        """
        if version in _catalog_versions(catalog):
            return
        orphan = self._load_snapshot(unit_id, version, current=True)
        _write_json_atomic(
            self._unit_root(unit_id) / CATALOG_FILE_NAME,
            _advance_catalog(catalog, orphan),
        )
        _LOGGER.warning("orphan_version_adopted", unit_id=unit_id, version=version)

    def _load_snapshot(self, unit_id: str, version: int, current: bool) -> AnalysisSnapshot:
        """Read a snapshot payload and its optional quality report.

        Raises:
            PersistenceError: If files are missing or invalid.
        """
        version_dir = self._version_dir(unit_id, version)
        payload = _read_json(version_dir / SNAPSHOT_FILE_NAME)
        if payload is None:
            raise PersistenceError(
                f"Missing snapshot file for {unit_id}:{version} at {version_dir}. "
                "Restore the version directory from backup."
            )
        quality_payload = _read_json(version_dir / QUALITY_FILE_NAME)
        try:
            quality = quality_from_payload(quality_payload) if quality_payload else None
            return snapshot_from_payload(payload, current=current, quality=quality)
        except (KeyError, TypeError, ValueError) as error:
            raise PersistenceError(
                f"Failed to decode snapshot {unit_id}:{version}: {error}. "
                "The stored payload is corrupt."
            ) from error

    def _read_catalog(self, unit_id: str) -> dict[str, Any] | None:
        return _read_json(self._unit_root(unit_id) / CATALOG_FILE_NAME)

    def _unit_root(self, unit_id: str) -> Path:
        return self._units_root / unit_id

    def _version_dir(self, unit_id: str, version: int) -> Path:
        return self._unit_root(unit_id) / VERSIONS_DIR_NAME / str(version)


def _unit_lock(unit_root: Path) -> threading.Lock:
    """Return the process-wide lock guarding one unit directory."""
    key = str(unit_root.resolve())
    with _UNIT_LOCKS_GUARD:
        return _UNIT_LOCKS.setdefault(key, threading.Lock())


def _empty_catalog(snapshot: AnalysisSnapshot) -> dict[str, Any]:
    return {
        "unit_id": snapshot.unit_id,
        "unit_name": snapshot.unit_name,
        "current_version": None,
        "versions": [],
    }


def _advance_catalog(catalog: dict[str, Any], snapshot: AnalysisSnapshot) -> dict[str, Any]:
    """Return a catalog copy pointing at the new snapshot."""
    versions = list(catalog["versions"])
    versions.append(
        {
            "version": snapshot.version,
            "created_at": snapshot.created_at.isoformat(),
            "file_name": snapshot.source.file_name,
            "record_count": snapshot.source.record_count,
        }
    )
    return {
        **catalog,
        "unit_name": snapshot.unit_name,
        "current_version": snapshot.version,
        "versions": versions,
    }


def _catalog_versions(catalog: dict[str, Any] | None) -> list[int]:
    if catalog is None:
        return []
    return [int(entry["version"]) for entry in catalog["versions"]]


def _read_json(path: Path) -> dict[str, Any] | None:
    """Read a JSON object file, returning None when it does not exist.

    Raises:
        PersistenceError: If the file is unreadable or not a JSON object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as error:
        raise PersistenceError(
            f"Failed to read {path}: {error}. Check the data root is mounted and readable."
        ) from error
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise PersistenceError(
            f"Failed to parse {path}: {error.msg}. Restore the file from backup."
        ) from error
    if not isinstance(payload, dict):
        raise PersistenceError(f"Failed to parse {path}: expected JSON object at top level.")
    return payload


def _write_json_atomic(path: Path, payload: dict[str, Any]) -> None:
    """Write JSON through a temporary file and an atomic replace.

    Raises:
        PersistenceError: If the write fails.
    """
    temp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        os.replace(temp_path, path)
    except OSError as error:
        temp_path.unlink(missing_ok=True)
        raise PersistenceError(
            f"Failed to persist {path}: {error}. "
            "Check write permissions and available disk space."
        ) from error
