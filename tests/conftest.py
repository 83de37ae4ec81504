"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src and the project root to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root / "src", project_root):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def _isolated_plantel_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer PLANTEL_* variables out of config-driven tests."""
    for variable_name in (
        "PLANTEL_DATA_ROOT",
        "PLANTEL_UNIT_COLUMN",
        "PLANTEL_COMMIT_MAX_RETRIES",
        "PLANTEL_MAX_WORKERS",
        "PLANTEL_S3_REGION",
        "PLANTEL_S3_PROFILE",
    ):
        monkeypatch.delenv(variable_name, raising=False)
