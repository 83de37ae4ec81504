"""Unit tests for run-spec CLI execution."""

from __future__ import annotations

import pytest

from cli.main import main
from core.types import IngestOptions, SnapshotResult
from store.analytics_sdk import PlantelClient
from tests.fixture_paths import fixture_path, roster_path


def _run(tmp_path, *args: str) -> int:
    return main(["--data-root", str(tmp_path), *args])


def test_cli_run_spec_routes_ingest_step_to_sdk(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path,
) -> None:
    """Run-spec command should route each step to SDK operations."""
    captured: dict[str, object] = {}

    def _fake_ingest(self: PlantelClient, options: IngestOptions) -> list[SnapshotResult]:
        captured["source"] = options.source_uri
        captured["unit_column"] = options.unit_column
        return [
            SnapshotResult(
                unit_id="hacienda",
                unit_name="Hacienda",
                succeeded=True,
                record_count=3,
                version=1,
            )
        ]

    monkeypatch.setattr(PlantelClient, "ingest", _fake_ingest)
    monkeypatch.setattr(PlantelClient, "get_history", lambda self, unit_id: [])
    exit_code = _run(tmp_path, "run-spec", str(fixture_path("run_spec/valid_pipeline.yaml")))
    output = capsys.readouterr().out.strip().splitlines()

    assert (
        exit_code == 0
        and output == ["hacienda\tv1\t3\tquality=-"]
        and captured
        == {
            "source": "tests/fixtures/rosters/roster_multi_unit.csv",
            "unit_column": "SECRETARIA",
        }
    )


def test_cli_run_spec_executes_reporting_steps(
    capsys: pytest.CaptureFixture[str],
    tmp_path,
) -> None:
    """Reporting steps should read the snapshots written by ingest."""
    _run(tmp_path, "ingest", roster_path("roster_multi_unit.csv"))
    capsys.readouterr()

    exit_code = _run(tmp_path, "run-spec", str(fixture_path("run_spec/reporting_pipeline.yaml")))
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and output[-1].startswith("difference\tagents=1\t")


def test_cli_run_spec_invalid_command_returns_error_code(
    capsys: pytest.CaptureFixture[str],
    tmp_path,
) -> None:
    """Invalid run-spec files should fail with exit code 1."""
    exit_code = _run(tmp_path, "run-spec", str(fixture_path("run_spec/invalid_command.yaml")))

    assert exit_code == 1 and "PlantelRunSpecError" in capsys.readouterr().err
