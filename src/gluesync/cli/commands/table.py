"""Commands for managing Glue Data Catalog tables."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from botocore.exceptions import BotoCoreError, ClientError

from gluesync.cli.common.actions import write_outputs
from gluesync.cli.common.context import GlueAppContext, build_glue_context
from gluesync.cli.common.exits import die, exit_from_exc, exit_with_details
from gluesync.cli.common.options import (
    CatalogIdOpt,
    ConfirmOpt,
    DatabaseNameOpt,
    DelayOpt,
    MaxAttemptsOpt,
    ProfileOpt,
    RegionOpt,
    TableInputFileOpt,
    TableInputOpt,
    TableNameOpt,
    WaitOpt,
)
from gluesync.cli.common.output import out
from gluesync.core.adapters.glue import error_details
from gluesync.core.availability import AvailabilityPoller, TableNotVisibleError
from gluesync.core.reconcile import ConfirmationDeclined, reconcile
from gluesync.core.tables import (
    Action,
    ReconcileRequest,
    TableInputError,
    parse_table_input,
)

table_app = typer.Typer(
    help="Glue Data Catalog table operations.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@table_app.callback()
def _init(
    ctx: typer.Context,
    profile: str | None = ProfileOpt,
    region: str | None = RegionOpt,
):
    """Record AWS settings; the Glue context is built when a command runs."""
    ctx.obj = {"profile": profile, "region": region}
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _read_table_input_or_exit(text: str | None, path: Path | None) -> str:
    """Return the TableInput text from exactly one of --table-input / --table-input-file."""
    if text and path:
        out.error("Use either --table-input or --table-input-file, not both.")
        raise typer.Exit(2)
    if path is not None:
        if str(path) == "-":
            return sys.stdin.read()
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            out.error(f"Cannot read {path}: {exc}")
            raise typer.Exit(2) from exc
    if not text:
        out.error("Missing TableInput. Provide --table-input or --table-input-file.")
        raise typer.Exit(2)
    return text


@table_app.command("sync")
def sync(
    ctx: typer.Context,
    database_name: str = DatabaseNameOpt,
    table_name: str = TableNameOpt,
    table_input: str | None = TableInputOpt,
    table_input_file: Path | None = TableInputFileOpt,
    catalog_id: str | None = CatalogIdOpt,
    wait: bool = WaitOpt,
    max_attempts: int = MaxAttemptsOpt,
    delay: float = DelayOpt,
    confirm: bool = ConfirmOpt,
):
    """Create a Glue table, or update it if it already exists."""
    catalog_id = catalog_id or None

    out.info(f"Creating/updating Glue table: {database_name}.{table_name}")

    raw = _read_table_input_or_exit(table_input, table_input_file)
    try:
        parsed = parse_table_input(raw)
    except TableInputError as exc:
        exit_from_exc(exc, message=f"Action failed: {exc}", code=1)

    appctx: GlueAppContext = build_glue_context(
        ctx.obj["profile"], ctx.obj["region"]
    )

    def _approve(action: Action) -> bool:
        verb = "Update existing" if action == Action.UPDATED else "Create new"
        return out.confirm(f"{verb} table {database_name}.{table_name}?")

    request = ReconcileRequest(
        database=database_name,
        table=table_name,
        table_input=parsed,
        catalog_id=catalog_id,
    )

    try:
        result = reconcile(
            appctx.adapter,
            request,
            poller=AvailabilityPoller(max_attempts=max_attempts, delay=delay)
            if wait
            else None,
            region=appctx.region,
            partition=appctx.partition,
            approve=_approve if confirm else None,
            on_info=out.info,
            on_warning=out.warn,
        )
    except ClientError as exc:
        exit_with_details(
            exc, message=f"Action failed: {exc}", details=error_details(exc), code=1
        )
    except TableNotVisibleError as exc:
        exit_from_exc(exc, message=f"Action failed: {exc}", code=1)
    except ConfirmationDeclined as exc:
        die(f"{exc}. Nothing was changed.", code=1)
    except BotoCoreError as exc:
        exit_from_exc(exc, message=f"Action failed: {exc}", code=1)

    outputs = {
        "table-name": result.table,
        "database-name": result.database,
        "table-arn": result.table_arn,
        "action": result.action.value,
    }
    write_outputs(outputs)

    out.header("Outputs")
    out.kv(outputs)
    out.result_table(result)
    out.success(
        f"Action completed successfully - table {result.database}.{result.table} "
        f"{result.action.value}"
    )
