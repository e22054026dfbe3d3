"""GitHub Actions integration for the CLI.

When gluesync runs as a workflow step, inputs arrive as `INPUT_<NAME>`
environment variables (handled by typer `envvar=` options), outputs are
appended to the file named by `$GITHUB_OUTPUT`, and warnings/errors can be
surfaced as workflow command annotations.
"""

from __future__ import annotations

import os
import uuid
from typing import Mapping


def input_envvar(name: str) -> str:
    """Return the env var GitHub Actions uses for an action input name."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def running_in_actions() -> bool:
    """True when running inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def workflow_command(command: str, message: str) -> str:
    """Format a workflow command line such as `::error::message`."""
    return f"::{command}::{_escape_data(message)}"


def _format_output(name: str, value: str) -> str:
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(outputs: Mapping[str, str]) -> bool:
    """
    Append step outputs to `$GITHUB_OUTPUT`.

    Returns:
        True if the outputs were written, False when no output file is set.
    """
    path = os.environ.get("GITHUB_OUTPUT")
    if not path:
        return False
    with open(path, "a", encoding="utf-8") as fh:
        for name, value in outputs.items():
            fh.write(_format_output(name, str(value)))
    return True
