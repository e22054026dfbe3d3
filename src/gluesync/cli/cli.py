"""CLI application for AWS Glue table tooling."""

import typer

from gluesync.cli.commands.table import table_app

app = typer.Typer(
    help="gluesync - create or update AWS Glue Data Catalog tables",
    no_args_is_help=True,
)

app.add_typer(table_app, name="table")


if __name__ == "__main__":
    app()
