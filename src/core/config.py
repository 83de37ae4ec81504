"""Runtime configuration model for plantel.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_COMMIT_MAX_RETRIES,
    DEFAULT_DATA_ROOT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_UNIT_COLUMN,
)
from core.errors import PlantelConfigError


@dataclass(frozen=True)
class PlantelConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for unit catalogs and snapshots.
        s3_region: Optional default AWS region for S3 roster sources.
        s3_profile: Optional AWS profile for boto3 session initialization.
        unit_column: Roster column naming the organizational unit.
        commit_max_retries: Attempts allowed for one versioning commit.
        max_workers: Thread count for parallel partition processing.
    """

    data_root: Path
    s3_region: str | None
    s3_profile: str | None
    unit_column: str
    commit_max_retries: int
    max_workers: int

    @classmethod
    def from_env(cls) -> "PlantelConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PlantelConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("PLANTEL_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        unit_column = os.getenv("PLANTEL_UNIT_COLUMN", DEFAULT_UNIT_COLUMN).strip().upper()
        if not unit_column:
            raise PlantelConfigError(
                "Invalid PLANTEL_UNIT_COLUMN value: expected a column name. "
                f"Unset it to use the default '{DEFAULT_UNIT_COLUMN}'."
            )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            s3_region=os.getenv("PLANTEL_S3_REGION"),
            s3_profile=os.getenv("PLANTEL_S3_PROFILE"),
            unit_column=unit_column,
            commit_max_retries=_parse_positive_int(
                "PLANTEL_COMMIT_MAX_RETRIES",
                os.getenv("PLANTEL_COMMIT_MAX_RETRIES", str(DEFAULT_COMMIT_MAX_RETRIES)),
            ),
            max_workers=_parse_positive_int(
                "PLANTEL_MAX_WORKERS",
                os.getenv("PLANTEL_MAX_WORKERS", str(DEFAULT_MAX_WORKERS)),
            ),
        )


def _parse_positive_int(variable_name: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        variable_name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer, at least 1.

    Raises:
        PlantelConfigError: If value is not a positive integer.
    """
    try:
        parsed_value = int(raw_value)
    except ValueError as error:
        raise PlantelConfigError(
            f"Invalid {variable_name} value: "
            f"expected integer, got '{raw_value}'. "
            f"Set {variable_name} to a numeric value."
        ) from error
    if parsed_value < 1:
        raise PlantelConfigError(
            f"Invalid {variable_name} value: expected at least 1, got {parsed_value}."
        )
    return parsed_value
