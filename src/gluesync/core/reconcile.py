"""Create-or-update reconciliation for Glue tables.

The reconciler probes the catalog for the target table and then issues either
an UpdateTable or a CreateTable call with the normalized TableInput. On the
create path an optional poller waits for the new entry to become visible.
All catalog access goes through an adapter so the decision logic can be
exercised without AWS.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from gluesync.core.tables import (
    Action,
    ReconcileRequest,
    ReconcileResult,
    TableNotFound,
    normalize_table_input,
)

DEFAULT_REGION = "us-east-1"
DEFAULT_PARTITION = "aws"


class ConfirmationDeclined(RuntimeError):
    """Raised when the approval gate rejects a catalog write."""

    def __init__(self, database: str, table: str, action: Action) -> None:
        verb = "update" if action == Action.UPDATED else "create"
        super().__init__(f"Declined to {verb} table {database}.{table}")
        self.database = database
        self.table = table
        self.action = action


class CatalogAdapter(Protocol):
    """Interface for the three catalog calls the reconciler needs."""

    def get_table(
        self, database: str, table: str, *, catalog_id: str | None = None
    ) -> dict[str, Any]:
        """Return the table definition or raise TableNotFound."""
        ...

    def create_table(
        self,
        database: str,
        table_input: dict[str, Any],
        *,
        catalog_id: str | None = None,
    ) -> None:
        """Create a table from a TableInput document."""
        ...

    def update_table(
        self,
        database: str,
        table_input: dict[str, Any],
        *,
        catalog_id: str | None = None,
    ) -> None:
        """Replace an existing table definition."""
        ...


Poller = Callable[[CatalogAdapter, str, str, str | None], Any]


def build_table_arn(
    region: str,
    database: str,
    table: str,
    catalog_id: str | None = None,
    *,
    partition: str = DEFAULT_PARTITION,
) -> str:
    """Build the Glue table ARN, using `*` as account when no catalog id is set."""
    account = catalog_id or "*"
    return f"arn:{partition}:glue:{region}:{account}:table/{database}/{table}"


def table_exists(
    adapter: CatalogAdapter,
    database: str,
    table: str,
    catalog_id: str | None = None,
) -> bool:
    """Return True if the table exists; other lookup errors propagate."""
    try:
        adapter.get_table(database, table, catalog_id=catalog_id)
    except TableNotFound:
        return False
    return True


def reconcile(
    adapter: CatalogAdapter,
    request: ReconcileRequest,
    *,
    poller: Poller | None = None,
    region: str = DEFAULT_REGION,
    partition: str = DEFAULT_PARTITION,
    approve: Callable[[Action], bool] | None = None,
    on_info: Callable[[str], None] | None = None,
    on_warning: Callable[[str], None] | None = None,
) -> ReconcileResult:
    """
    Create or update a Glue table so it matches `request.table_input`.

    Steps:
      1) force TableInput.Name to the requested table name
      2) probe for the table
      3) update it if it exists, otherwise create it and (optionally) poll
         until it is visible

    Args:
        adapter: Catalog adapter used for all remote calls.
        request: Desired table state.
        poller: Called as poller(adapter, database, table, catalog_id) after a
                successful create. None skips the visibility wait.
        region: Region used to build the table ARN.
        partition: AWS partition used to build the table ARN.
        approve: Optional gate called with the chosen action before any write.
                 Returning False aborts with ConfirmationDeclined.
        on_info: Receives progress messages.
        on_warning: Receives non-fatal warnings.

    Returns:
        A ReconcileResult describing what was done.

    Raises:
        ConfirmationDeclined: If `approve` rejected the write.
        TableNotVisibleError: If the poller gave up waiting for the new table.
        Exception: Any adapter failure other than a not-found probe, unchanged.
    """
    info = on_info or (lambda _msg: None)
    database, table, catalog_id = request.database, request.table, request.catalog_id

    table_input = normalize_table_input(
        request.table_input, table, on_warning=on_warning
    )

    info("Checking if table already exists...")
    exists = table_exists(adapter, database, table, catalog_id)
    action = Action.UPDATED if exists else Action.CREATED
    info("Table exists, will update" if exists else "Table does not exist, will create")

    if approve is not None and not approve(action):
        raise ConfirmationDeclined(database, table, action)

    if exists:
        info("Updating existing table...")
        adapter.update_table(database, table_input, catalog_id=catalog_id)
        info("Table updated successfully")
    else:
        info("Creating new table...")
        adapter.create_table(database, table_input, catalog_id=catalog_id)
        info("Table created successfully")
        if poller is not None:
            info("Waiting for table to become visible...")
            poller(adapter, database, table, catalog_id)
            info("Table is visible")

    return ReconcileResult(
        table=table,
        database=database,
        table_arn=build_table_arn(
            region, database, table, catalog_id, partition=partition
        ),
        action=action,
    )
