"""S3 URI parsing helpers.

This module validates ``s3://bucket/key`` roster locations before any
network call is made.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import PlantelIngestError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 object location."""

    bucket: str
    key: str


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 object URI.

    Args:
        uri: URI in format ``s3://bucket/key``.

    Returns:
        Parsed bucket and key pair.

    Raises:
        PlantelIngestError: If bucket or key is missing.
    """
    bucket, _, key = uri.removeprefix("s3://").partition("/")
    if not bucket or not key or key.endswith("/"):
        raise PlantelIngestError(
            f"Invalid S3 URI '{uri}': expected s3://bucket/key of one roster file. "
            "Provide both bucket and object key."
        )
    return S3Location(bucket=bucket, key=key)
