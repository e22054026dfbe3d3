"""Application context management for the CLI."""

from dataclasses import dataclass

import boto3

from gluesync.cli.common.exits import die
from gluesync.core.adapters.glue import GlueCatalogAdapter
from gluesync.core.auth import AuthError, get_client, get_session, resolve_partition


@dataclass
class GlueAppContext:
    """Application context holding the AWS session and Glue catalog adapter."""

    profile: str | None
    region: str
    partition: str
    session: boto3.Session
    adapter: GlueCatalogAdapter


def build_glue_context(profile: str | None, region: str | None) -> GlueAppContext:
    """Build and return the application context for Glue table commands.

    Args:
        profile: Optional AWS profile name to use for credentials.
        region: Optional AWS region; falls back to the profile region.

    Returns:
        GlueAppContext: Application context with configured session and adapter.
    """
    try:
        session = get_session(profile, region)
        client = get_client(session)
    except AuthError as exc:
        die(str(exc), code=1)
    return GlueAppContext(
        profile=profile,
        region=session.region_name,
        partition=resolve_partition(session),
        session=session,
        adapter=GlueCatalogAdapter(client),
    )
