"""Output formatting utilities for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from gluesync.cli.common.actions import running_in_actions, workflow_command
from gluesync.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "auto_enter"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be GLUESYNC consistent."""
        return f"[GLUESYNC] {message}"

    def _annotate(self, command: str, msg: str) -> None:
        """Mirror a message as a GitHub Actions annotation when running in a workflow."""
        if running_in_actions():
            console.print(
                workflow_command(command, msg),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {escape(msg)}")

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {escape(msg)}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {escape(msg)}")
        self._annotate("warning", msg)

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {escape(msg)}")
        self._annotate("error", msg)

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {escape(str(v))}", soft_wrap=True)

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        console.print("[meta]Use y/n then Enter[/]")

        prompt = self._q_try(
            questionary.confirm,
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def result_table(self, result: Any, title: str = "Result") -> None:
        """
        Render a summary of a reconciliation.

        Expects an object with .database .table .action .table_arn
        (like gluesync.core.tables.ReconcileResult).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok", no_wrap=True)
        t.add_column("Action")
        t.add_column("ARN", style="meta")

        action = getattr(result.action, "value", str(result.action))
        t.add_row(f"{result.database}.{result.table}", action, result.table_arn)

        console.print(t)


out = Out()
