"""Post-create visibility polling.

Glue can acknowledge a CreateTable call before the new entry is visible to
subsequent GetTable calls. The functions here close that window with a
bounded, fixed-interval poll. Behavior is synchronous and explicit: one lookup
per attempt, a constant delay between attempts, no backoff.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from gluesync.core.tables import TableNotFound

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_DELAY = 1.0


class TableNotVisibleError(TimeoutError):
    """Raised when a created table is still not visible after all attempts."""

    def __init__(self, database: str, table: str, attempts: int) -> None:
        super().__init__(
            f"Table {database}.{table} was created but did not become visible "
            f"after {attempts} attempt(s)"
        )
        self.database = database
        self.table = table
        self.attempts = attempts


class TableLookupAdapter(Protocol):
    """Interface for the read-only table lookup used while polling."""

    def get_table(
        self, database: str, table: str, *, catalog_id: str | None = None
    ) -> dict[str, Any]:
        """Return the table definition or raise TableNotFound."""
        ...


def wait_until_visible(
    adapter: TableLookupAdapter,
    database: str,
    table: str,
    catalog_id: str | None = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Block until `database.table` is returned by a lookup.

    Args:
        adapter: Catalog adapter used for the lookup.
        database: Glue database name.
        table: Glue table name.
        catalog_id: Optional catalog account id.
        max_attempts: Total number of lookups before giving up.
        delay: Seconds to sleep between lookups.
        sleep: Sleep function, replaceable in tests.

    Returns:
        The attempt number on which the table was found.

    Raises:
        TableNotVisibleError: If every attempt reported the table as missing.
        Exception: Any other lookup failure, propagated on the attempt it occurs.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    if delay < 0:
        raise ValueError("delay must be >= 0")

    for attempt in range(1, max_attempts + 1):
        try:
            adapter.get_table(database, table, catalog_id=catalog_id)
            return attempt
        except TableNotFound:
            if attempt < max_attempts:
                sleep(delay)

    raise TableNotVisibleError(database, table, max_attempts)


@dataclass(frozen=True)
class AvailabilityPoller:
    """Poller settings bound into a single callable for the reconciler."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float = DEFAULT_DELAY
    sleep: Callable[[float], None] = time.sleep

    def __call__(
        self,
        adapter: TableLookupAdapter,
        database: str,
        table: str,
        catalog_id: str | None = None,
    ) -> int:
        return wait_until_visible(
            adapter,
            database,
            table,
            catalog_id,
            max_attempts=self.max_attempts,
            delay=self.delay,
            sleep=self.sleep,
        )
