"""Unit tests for run-spec parsing."""

from __future__ import annotations

import pytest

from core.errors import PlantelRunSpecError
from core.run_spec import load_run_spec
from tests.fixture_paths import fixture_path


def test_load_run_spec_valid_pipeline_parses_steps() -> None:
    """Valid run-spec should parse expected command order."""
    spec = load_run_spec(str(fixture_path("run_spec/valid_pipeline.yaml")))
    assert tuple(step.command for step in spec.steps) == ("ingest", "history")


def test_load_run_spec_reads_defaults() -> None:
    """Top-level defaults should be parsed into the typed defaults object."""
    spec = load_run_spec(str(fixture_path("run_spec/valid_pipeline.yaml")))
    assert spec.defaults.unit_column == "SECRETARIA"


def test_load_run_spec_keeps_step_arguments() -> None:
    """Step fields other than command should be kept as arguments."""
    spec = load_run_spec(str(fixture_path("run_spec/valid_pipeline.yaml")))
    assert spec.steps[1].args == {"unit": "hacienda"}


def test_load_run_spec_invalid_command_raises_error() -> None:
    """Unsupported command name should raise run-spec error."""
    with pytest.raises(PlantelRunSpecError):
        load_run_spec(str(fixture_path("run_spec/invalid_command.yaml")))
    assert True


def test_load_run_spec_invalid_defaults_key_raises_error() -> None:
    """Unknown defaults field should be rejected."""
    with pytest.raises(PlantelRunSpecError):
        load_run_spec(str(fixture_path("run_spec/invalid_defaults_key.yaml")))
    assert True


def test_load_run_spec_unsupported_version_raises_error() -> None:
    """Only schema version 1 is accepted."""
    with pytest.raises(PlantelRunSpecError):
        load_run_spec(str(fixture_path("run_spec/unsupported_version.yaml")))
    assert True


def test_load_run_spec_missing_file_raises_error(tmp_path) -> None:
    """Missing spec files should fail with an actionable error."""
    with pytest.raises(PlantelRunSpecError):
        load_run_spec(str(tmp_path / "absent.yaml"))
    assert True


def test_load_run_spec_empty_steps_raises_error(tmp_path) -> None:
    """A spec must contain at least one step."""
    spec_path = tmp_path / "empty.yaml"
    spec_path.write_text("version: 1\nsteps: []\n", encoding="utf-8")

    with pytest.raises(PlantelRunSpecError):
        load_run_spec(str(spec_path))
    assert True
