"""Core table models plus TableInput parsing and normalization.

This module defines the request/result types used by the reconciler and the
helpers that turn caller-supplied TableInput JSON into a request body. The
TableInput document itself is passed through opaquely: only JSON
well-formedness and the table name are checked here, everything else is left
for the Glue API to validate.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class TableInputError(ValueError):
    """Raised when the supplied TableInput text is not a JSON object."""


class TableNotFound(LookupError):
    """Raised by catalog adapters when a table lookup finds nothing."""

    def __init__(self, database: str, table: str) -> None:
        super().__init__(f"Table {database}.{table} not found")
        self.database = database
        self.table = table


class Action(str, Enum):
    """
    What the reconciler did to the catalog entry.

    Values:
        CREATED: The table did not exist and was created.
        UPDATED: The table already existed and was updated in place.
    """

    CREATED = "created"
    UPDATED = "updated"


@dataclass(frozen=True)
class ReconcileRequest:
    """
    Desired state for a single Glue table.

    Attributes:
        database: Glue database (catalog namespace) holding the table.
        table: Table name; always wins over the Name inside table_input.
        table_input: Glue TableInput document.
        catalog_id: Account id of the catalog for cross-account access.
                    None targets the caller's own account.
    """

    database: str
    table: str
    table_input: dict[str, Any]
    catalog_id: str | None = None


@dataclass(frozen=True)
class ReconcileResult:
    """Summary of a completed reconciliation."""

    table: str
    database: str
    table_arn: str
    action: Action


def parse_table_input(text: str) -> dict[str, Any]:
    """
    Parse TableInput JSON text.

    Raises:
        TableInputError: If the text is not valid JSON or not a JSON object.
    """
    try:
        value = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise TableInputError(f"Failed to parse table-input JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise TableInputError(
            "Failed to parse table-input JSON: expected an object, "
            f"got {type(value).__name__}"
        )
    return value


def normalize_table_input(
    table_input: dict[str, Any],
    table: str,
    *,
    on_warning: Callable[[str], None] | None = None,
) -> dict[str, Any]:
    """
    Return a copy of table_input whose Name equals `table`.

    A missing Name is filled in silently; a different Name is overridden and
    reported through `on_warning`. The caller's dict is left untouched.
    """
    normalized = dict(table_input)
    current = normalized.get("Name")
    if current and current != table and on_warning is not None:
        on_warning(
            f"TableInput.Name ({current}) differs from table name ({table}). "
            "Using table name."
        )
    normalized["Name"] = table
    return normalized
