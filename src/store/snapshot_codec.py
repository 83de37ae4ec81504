"""Shared JSON serialization for snapshot payloads.

This module centralizes AnalysisSnapshot and QualityReport encoding.
It is reused by the snapshot store and the CLI JSON output.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from core.types import (
    AnalysisSnapshot,
    CategoryBucket,
    QualityProblem,
    QualityReport,
    SalarySummary,
    SourceFileInfo,
    TrendDeltas,
)


def snapshot_to_payload(snapshot: AnalysisSnapshot) -> dict[str, object]:
    """Serialize a snapshot into a JSON-safe payload.

    The current flag and quality report are not part of the payload;
    the store derives them from the unit catalog and quality file.

    Args:
        snapshot: Snapshot to serialize.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "unit_id": snapshot.unit_id,
        "unit_name": snapshot.unit_name,
        "version": snapshot.version,
        "created_at": snapshot.created_at.isoformat(),
        "source": {
            "file_name": snapshot.source.file_name,
            "record_count": snapshot.source.record_count,
            "ingested_at": snapshot.source.ingested_at.isoformat(),
        },
        "total_records": snapshot.total_records,
        "breakdowns": {
            dimension: [_bucket_to_payload(bucket) for bucket in buckets]
            for dimension, buckets in snapshot.breakdowns.items()
        },
        "salary": {
            "average": snapshot.salary.average,
            "minimum": snapshot.salary.minimum,
            "maximum": snapshot.salary.maximum,
            "mass": snapshot.salary.mass,
            "salaried_count": snapshot.salary.salaried_count,
            "excluded_count": snapshot.salary.excluded_count,
        },
        "trend": _trend_to_payload(snapshot.trend),
    }


def snapshot_from_payload(
    payload: Mapping[str, Any],
    current: bool,
    quality: QualityReport | None = None,
) -> AnalysisSnapshot:
    """Deserialize a stored payload into a snapshot.

    Args:
        payload: Serialized snapshot payload.
        current: Whether the catalog marks this version as current.
        quality: Optional quality annotation.

    Returns:
        Parsed AnalysisSnapshot.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a field has an invalid value.
    """
    source = payload["source"]
    salary = payload["salary"]
    return AnalysisSnapshot(
        unit_id=str(payload["unit_id"]),
        unit_name=str(payload["unit_name"]),
        version=int(payload["version"]),
        current=current,
        created_at=datetime.fromisoformat(str(payload["created_at"])),
        source=SourceFileInfo(
            file_name=str(source["file_name"]),
            record_count=int(source["record_count"]),
            ingested_at=datetime.fromisoformat(str(source["ingested_at"])),
        ),
        total_records=int(payload["total_records"]),
        breakdowns={
            str(dimension): tuple(_bucket_from_payload(item) for item in buckets)
            for dimension, buckets in dict(payload["breakdowns"]).items()
        },
        salary=SalarySummary(
            average=float(salary["average"]),
            minimum=float(salary["minimum"]),
            maximum=float(salary["maximum"]),
            mass=float(salary["mass"]),
            salaried_count=int(salary.get("salaried_count", 0)),
            excluded_count=int(salary.get("excluded_count", 0)),
        ),
        trend=_trend_from_payload(payload.get("trend")),
        quality=quality,
    )


def quality_to_payload(report: QualityReport) -> dict[str, object]:
    """Serialize a quality report into a JSON-safe payload."""
    return {
        "score": report.score,
        "validated_at": report.validated_at.isoformat(),
        "problems": [
            {
                "kind": problem.kind,
                "field": problem.field,
                "severity": problem.severity,
                "description": problem.description,
            }
            for problem in report.problems
        ],
    }


def quality_from_payload(payload: Mapping[str, Any]) -> QualityReport:
    """Deserialize a quality report payload."""
    return QualityReport(
        score=int(payload["score"]),
        validated_at=datetime.fromisoformat(str(payload["validated_at"])),
        problems=tuple(
            QualityProblem(
                kind=str(item["kind"]),
                field=str(item["field"]),
                severity=str(item["severity"]),
                description=str(item["description"]),
            )
            for item in payload.get("problems", [])
        ),
    )


def snapshot_to_document(snapshot: AnalysisSnapshot) -> dict[str, object]:
    """Serialize a snapshot with its current flag and quality report."""
    document = snapshot_to_payload(snapshot)
    document["current"] = snapshot.current
    document["quality"] = quality_to_payload(snapshot.quality) if snapshot.quality else None
    return document


def _bucket_to_payload(bucket: CategoryBucket) -> dict[str, object]:
    return {"label": bucket.label, "count": bucket.count, "percentage": bucket.percentage}


def _bucket_from_payload(payload: Mapping[str, Any]) -> CategoryBucket:
    return CategoryBucket(
        label=str(payload["label"]),
        count=int(payload["count"]),
        percentage=float(payload["percentage"]),
    )


def _trend_to_payload(trend: TrendDeltas | None) -> dict[str, object] | None:
    if trend is None:
        return None
    return {
        "previous_version": trend.previous_version,
        "headcount": trend.headcount,
        "payroll_mass": trend.payroll_mass,
        "average_salary": trend.average_salary,
    }


def _trend_from_payload(payload: Mapping[str, Any] | None) -> TrendDeltas | None:
    if payload is None:
        return None
    return TrendDeltas(
        previous_version=int(payload["previous_version"]),
        headcount=float(payload["headcount"]),
        payroll_mass=float(payload["payroll_mass"]),
        average_salary=float(payload["average_salary"]),
    )
