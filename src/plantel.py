"""Public SDK surface for Plantel.

This module provides a stable import path for roster analytics users.
It re-exports the primary client and typed result models.
"""

from __future__ import annotations

from core.config import PlantelConfig
from core.constants import SUPPORTED_DIMENSIONS
from core.types import (
    AnalysisSnapshot,
    CategoryBucket,
    ComparisonResult,
    FieldStatistics,
    IngestOptions,
    OverallSummary,
    QualityReport,
    SalarySummary,
    SnapshotResult,
    TrendDeltas,
    UnitHeadline,
)
from store.analytics_sdk import PlantelClient

__all__ = [
    "AnalysisSnapshot",
    "CategoryBucket",
    "ComparisonResult",
    "FieldStatistics",
    "IngestOptions",
    "OverallSummary",
    "PlantelClient",
    "PlantelConfig",
    "QualityReport",
    "SUPPORTED_DIMENSIONS",
    "SalarySummary",
    "SnapshotResult",
    "TrendDeltas",
    "UnitHeadline",
]
