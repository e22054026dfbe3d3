"""Session and client helpers for AWS Glue.

This module centralizes creation of the boto3 session and Glue client and
applies small normalization rules (region fallback, partition lookup) so the
rest of the application can rely on a resolved region and partition.
Credentials themselves come from the standard AWS credential chain.
"""

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from gluesync.core.reconcile import DEFAULT_PARTITION, DEFAULT_REGION


class AuthError(RuntimeError):
    """Raised when an AWS session or client cannot be created."""


def _sanitize_region(region: str | None) -> str | None:
    """
    Normalize a region name.

    - Strips surrounding whitespace
    - Lowercases the value
    - Treats empty strings as unset (GitHub Actions passes unset inputs as "")
    """
    if not region:
        return None
    region = region.strip().lower()
    return region or None


def get_session(
    profile: str | None = None, region: str | None = None
) -> boto3.Session:
    """
    Create a boto3 session for an optional named profile and region.

    When neither the argument nor the AWS configuration provides a region,
    DEFAULT_REGION is used.
    """
    try:
        session = boto3.Session(
            profile_name=profile or None, region_name=_sanitize_region(region)
        )
        if not session.region_name:
            session = boto3.Session(
                profile_name=profile or None, region_name=DEFAULT_REGION
            )
    except ProfileNotFound as exc:
        raise AuthError(
            f"AWS profile '{profile}' was not found. "
            "Check ~/.aws/config or set AWS_PROFILE."
        ) from exc
    return session


def resolve_partition(session: boto3.Session) -> str:
    """Return the AWS partition (aws, aws-cn, aws-us-gov, ...) for the session region."""
    try:
        return session.get_partition_for_region(session.region_name)
    except (BotoCoreError, ValueError):
        return DEFAULT_PARTITION


def get_client(session: boto3.Session):
    """Create a Glue client from a session."""
    try:
        return session.client("glue")
    except BotoCoreError as exc:
        raise AuthError(f"Could not create AWS Glue client: {exc}") from exc
