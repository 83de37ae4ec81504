"""Unit tests for snapshot store persistence."""

from __future__ import annotations

from dataclasses import replace
import json

import pytest

from core.config import PlantelConfig
from core.errors import PersistenceError, SnapshotNotFoundError, StaleVersionError
from core.types import QualityReport
from store.snapshot_codec import snapshot_to_payload
from store.snapshot_store import SnapshotStore
from tests.roster_factories import FIXED_NOW, snapshot


def _store(tmp_path) -> SnapshotStore:
    return SnapshotStore(replace(PlantelConfig.from_env(), data_root=tmp_path))


def test_commit_snapshot_makes_first_version_current(tmp_path) -> None:
    """The first commit should become the unit's current snapshot."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)

    current = store.get_current("hacienda")

    assert (current.version, current.current) == (1, True)


def test_commit_snapshot_supersedes_previous_version(tmp_path) -> None:
    """Committing version 2 should clear the current flag of version 1."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)
    store.commit_snapshot(snapshot(version=2), expected_version=1)

    first = store.load_version("hacienda", 1)

    assert first.current is False


def test_commit_snapshot_rejects_stale_expected_version(tmp_path) -> None:
    """A writer that read an old current version should lose."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)

    with pytest.raises(StaleVersionError):
        store.commit_snapshot(snapshot(version=1), expected_version=None)

    assert store.get_current("hacienda").version == 1


def test_list_versions_returns_newest_first(tmp_path) -> None:
    """History should be ordered by descending version."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)
    store.commit_snapshot(snapshot(version=2), expected_version=1)

    history = store.list_versions("hacienda")

    assert [(item.version, item.current) for item in history] == [(2, True), (1, False)]


def test_list_versions_unknown_unit_is_empty(tmp_path) -> None:
    """Unknown units have an empty history."""
    assert _store(tmp_path).list_versions("inexistente") == []


def test_get_current_raises_for_unknown_unit(tmp_path) -> None:
    """Reading a unit without snapshots should fail with not found."""
    with pytest.raises(SnapshotNotFoundError):
        _store(tmp_path).get_current("inexistente")
    assert True


def test_load_version_raises_for_unknown_version(tmp_path) -> None:
    """Loading a version that was never committed should fail."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)

    with pytest.raises(SnapshotNotFoundError):
        store.load_version("hacienda", 7)
    assert True


def test_save_quality_report_is_returned_on_read(tmp_path) -> None:
    """Quality annotations should be loaded with the snapshot."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)
    store.save_quality_report(
        "hacienda", 1, QualityReport(score=85, problems=(), validated_at=FIXED_NOW)
    )

    current = store.get_current("hacienda")

    assert current.quality == QualityReport(score=85, problems=(), validated_at=FIXED_NOW)


def test_list_current_returns_one_snapshot_per_unit(tmp_path) -> None:
    """Cross-unit listing should only include current snapshots."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot("hacienda", version=1), expected_version=None)
    store.commit_snapshot(snapshot("hacienda", version=2), expected_version=1)
    store.commit_snapshot(snapshot("salud", version=1), expected_version=None)

    current = store.list_current()

    assert [(item.unit_id, item.version) for item in current] == [("hacienda", 2), ("salud", 1)]


def test_read_current_raises_for_corrupt_catalog(tmp_path) -> None:
    """A damaged catalog should surface as a persistence error."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)
    (tmp_path / "units" / "hacienda" / "catalog.json").write_text("{broken", encoding="utf-8")

    with pytest.raises(PersistenceError):
        store.read_current("hacienda")
    assert True


def _publish_orphan(tmp_path, version: int) -> None:
    """Write a complete version directory without touching the catalog."""
    version_dir = tmp_path / "units" / "hacienda" / "versions" / str(version)
    version_dir.mkdir(parents=True)
    payload = snapshot_to_payload(snapshot(version=version, total_records=9))
    (version_dir / "snapshot.json").write_text(json.dumps(payload), encoding="utf-8")


def test_commit_snapshot_leaves_no_staging_directories(tmp_path) -> None:
    """Only published version directories should remain after a commit."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)

    entries = sorted(path.name for path in (tmp_path / "units" / "hacienda" / "versions").iterdir())

    assert entries == ["1"]


def test_commit_snapshot_adopts_orphaned_version(tmp_path) -> None:
    """A version published without its catalog swap should become current."""
    store = _store(tmp_path)
    store.commit_snapshot(snapshot(version=1), expected_version=None)
    _publish_orphan(tmp_path, version=2)

    with pytest.raises(StaleVersionError):
        store.commit_snapshot(snapshot(version=2), expected_version=1)
    current = store.get_current("hacienda")

    assert (current.version, current.total_records) == (2, 9)
