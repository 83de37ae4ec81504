"""Roster file readers for ingestion.

This module loads spreadsheet or CSV rosters from local paths or S3
objects and returns raw rows keyed by upper-cased column name.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd

from core.config import PlantelConfig
from core.constants import SUPPORTED_ROSTER_EXTENSIONS
from core.errors import PlantelDependencyError, PlantelIngestError
from core.logging_config import get_logger
from core.s3_uri import parse_s3_uri
from core.types import RosterFile
from ingest.row_normalizer import normalize_column_name

_LOGGER = get_logger(__name__)


def read_roster(source_uri: str, config: PlantelConfig) -> RosterFile:
    """Load a roster from a local file or S3 object.

    Args:
        source_uri: Local file path or ``s3://bucket/key`` URI.
        config: Runtime configuration for S3 session defaults.

    Returns:
        Roster rows in file order.

    Raises:
        PlantelIngestError: If the source cannot be read or parsed.
    """
    if source_uri.startswith("s3://"):
        roster = _read_s3_roster(source_uri, config)
    else:
        roster = _read_local_roster(Path(source_uri).expanduser())
    _LOGGER.info("roster_loaded", source=roster.file_name, row_count=len(roster.rows))
    return roster


def rows_from_frame(frame: pd.DataFrame) -> tuple[dict[str, object], ...]:
    """Convert a parsed frame into raw row mappings.

    Header names are trimmed and upper-cased; empty cells become None.

    Args:
        frame: Parsed roster frame.

    Returns:
        One mapping per non-empty row.
    """
    frame = frame.dropna(how="all")
    frame.columns = [normalize_column_name(column) for column in frame.columns]
    cleaned = frame.astype(object).where(frame.notna(), None)
    return tuple(
        {str(column): value for column, value in row.items()}
        for row in cleaned.to_dict(orient="records")
    )


def _read_local_roster(source_path: Path) -> RosterFile:
    """Read a roster from the local file system.

    Args:
        source_path: Roster file path.

    Returns:
        Parsed roster.

    Raises:
        PlantelIngestError: If path is missing or unsupported.
    """
    if not source_path.is_file():
        raise PlantelIngestError(
            f"Failed to read roster at {source_path}: file does not exist. "
            "Provide an existing .xlsx or .csv file."
        )
    suffix = _supported_suffix(source_path.name)
    with source_path.open("rb") as handle:
        frame = _parse_frame(handle, suffix, str(source_path))
    return RosterFile(file_name=source_path.name, rows=rows_from_frame(frame))


def _read_s3_roster(source_uri: str, config: PlantelConfig) -> RosterFile:
    """Download and parse a roster stored in S3.

    Args:
        source_uri: S3 object URI.
        config: Runtime configuration for region/profile.

    Returns:
        Parsed roster.

    Raises:
        PlantelIngestError: If the object cannot be fetched or parsed.
    """
    location = parse_s3_uri(source_uri)
    suffix = _supported_suffix(location.key)
    s3_client = _create_s3_client(config)
    try:
        body = s3_client.get_object(Bucket=location.bucket, Key=location.key)["Body"].read()
    except Exception as error:
        raise PlantelIngestError(
            f"Failed to download roster {source_uri}: {error}. "
            "Check AWS credentials and the object key."
        ) from error
    frame = _parse_frame(BytesIO(body), suffix, source_uri)
    return RosterFile(file_name=Path(location.key).name, rows=rows_from_frame(frame))


def _parse_frame(handle: BinaryIO, suffix: str, source_label: str) -> pd.DataFrame:
    """Parse roster bytes into a frame without type coercion.

    Raises:
        PlantelIngestError: If the content is not a readable table.
    """
    try:
        if suffix == ".csv":
            return pd.read_csv(handle, dtype=object, skipinitialspace=True)
        return pd.read_excel(handle, sheet_name=0, dtype=object, engine="openpyxl")
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (ValueError, OSError, pd.errors.ParserError) as error:
        raise PlantelIngestError(
            f"Failed to parse roster {source_label}: {error}. "
            "Export the roster again as .xlsx or .csv and retry."
        ) from error


def _supported_suffix(name: str) -> str:
    """Return the lowercase extension or fail for unsupported files."""
    suffix = Path(name).suffix.lower()
    if suffix not in SUPPORTED_ROSTER_EXTENSIONS:
        supported = ", ".join(SUPPORTED_ROSTER_EXTENSIONS)
        raise PlantelIngestError(
            f"Unsupported roster format '{suffix or name}'. Use one of: {supported}."
        )
    return suffix


def _create_s3_client(config: PlantelConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config containing optional profile/region.

    Returns:
        Boto3 S3 client.

    Raises:
        PlantelDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise PlantelDependencyError(
            "S3 support requires boto3, but it is not installed. "
            "Install boto3 to ingest rosters from s3:// sources."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")
