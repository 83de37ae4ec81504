"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import PlantelConfig
from core.errors import PlantelConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("PLANTEL_DATA_ROOT", "./.tmp-plantel")

    config = PlantelConfig.from_env()

    assert config.data_root.name == ".tmp-plantel"


def test_from_env_defaults_unit_column(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should default the unit column to SECRETARIA."""
    monkeypatch.delenv("PLANTEL_UNIT_COLUMN", raising=False)

    config = PlantelConfig.from_env()

    assert config.unit_column == "SECRETARIA"


def test_from_env_upper_cases_unit_column(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unit column override should match upper-cased roster headers."""
    monkeypatch.setenv("PLANTEL_UNIT_COLUMN", " ministerio ")

    config = PlantelConfig.from_env()

    assert config.unit_column == "MINISTERIO"


def test_from_env_reads_commit_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    """Commit retry budget should be configurable."""
    monkeypatch.setenv("PLANTEL_COMMIT_MAX_RETRIES", "9")

    config = PlantelConfig.from_env()

    assert config.commit_max_retries == 9


def test_from_env_raises_for_invalid_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric retry count."""
    monkeypatch.setenv("PLANTEL_COMMIT_MAX_RETRIES", "not-a-number")

    with pytest.raises(PlantelConfigError):
        PlantelConfig.from_env()

    assert os.getenv("PLANTEL_COMMIT_MAX_RETRIES") == "not-a-number"


def test_from_env_raises_for_zero_workers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Worker count below one should be rejected."""
    monkeypatch.setenv("PLANTEL_MAX_WORKERS", "0")

    with pytest.raises(PlantelConfigError):
        PlantelConfig.from_env()
    assert True
