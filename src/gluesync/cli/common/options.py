"""Common CLI options for the CLI."""

import typer

from gluesync.cli.common.actions import input_envvar

ProfileOpt = typer.Option(
    None,
    "--profile",
    "-p",
    envvar="AWS_PROFILE",
    help="AWS named profile (from ~/.aws/config)",
)

RegionOpt = typer.Option(
    None,
    "--region",
    envvar=["AWS_REGION", "AWS_DEFAULT_REGION"],
    help="AWS region (defaults to the profile region, then us-east-1)",
)

DatabaseNameOpt = typer.Option(
    ...,
    "--database-name",
    "-d",
    envvar=input_envvar("database-name"),
    help="Glue database name",
)

TableNameOpt = typer.Option(
    ...,
    "--table-name",
    "-t",
    envvar=input_envvar("table-name"),
    help="Glue table name (overrides TableInput.Name)",
)

TableInputOpt = typer.Option(
    None,
    "--table-input",
    envvar=input_envvar("table-input"),
    help="Glue TableInput as JSON text",
)

TableInputFileOpt = typer.Option(
    None,
    "--table-input-file",
    "-f",
    help="Read the Glue TableInput JSON from a file ('-' for stdin)",
    allow_dash=True,
)

CatalogIdOpt = typer.Option(
    None,
    "--catalog-id",
    envvar=input_envvar("catalog-id"),
    help="Catalog account id for cross-account access (defaults to the caller's account)",
)

WaitOpt = typer.Option(
    True,
    "--wait/--no-wait",
    envvar=input_envvar("wait"),
    help="After creating, wait until the table is visible",
)

MaxAttemptsOpt = typer.Option(
    10,
    "--max-attempts",
    min=1,
    help="Number of lookups while waiting for a new table",
)

DelayOpt = typer.Option(
    1.0,
    "--delay",
    min=0.0,
    help="Seconds between lookups while waiting for a new table",
)

ConfirmOpt = typer.Option(
    False,
    "--confirm/--no-confirm",
    help="Ask for confirmation before creating or updating the table",
)
