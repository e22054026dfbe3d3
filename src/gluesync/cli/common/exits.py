"""Exit handling utilities for the CLI."""

from typing import Any, Mapping, NoReturn

import typer

from gluesync.cli.common.output import out


def die(msg: str, code: int = 1) -> "None":
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Helper function to print an error message and exit with a given code.

    Exists to satisfy pylint W0707 and to standardize error exits.
    """
    out.error(message)
    raise typer.Exit(code) from exc


def exit_with_details(
    exc: Exception,
    *,
    message: str,
    details: Mapping[str, Any],
    code: int = 1,
) -> NoReturn:
    """Print diagnostic details for a failed remote call, then exit."""
    if details:
        out.header("AWS SDK Error Details:")
        out.kv(details)
    exit_from_exc(exc, message=message, code=code)
