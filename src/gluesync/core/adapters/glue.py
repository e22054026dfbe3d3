from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError

from gluesync.core.tables import TableNotFound

NOT_FOUND_CODE = "EntityNotFoundException"


def error_code(exc: ClientError) -> str | None:
    """Return the AWS error code carried by a ClientError."""
    return (getattr(exc, "response", None) or {}).get("Error", {}).get("Code")


def error_details(exc: ClientError) -> dict[str, Any]:
    """Collect the diagnostic fields AWS attaches to a ClientError."""
    response = getattr(exc, "response", None) or {}
    err = response.get("Error", {})
    meta = response.get("ResponseMetadata", {})
    details = {
        "Error Code": err.get("Code"),
        "HTTP Status": meta.get("HTTPStatusCode"),
        "Request ID": meta.get("RequestId"),
        "Message": err.get("Message"),
    }
    return {k: v for k, v in details.items() if v is not None}


class GlueCatalogAdapter:
    """Adapter around the boto3 Glue client (GetTable/CreateTable/UpdateTable)."""

    def __init__(self, client) -> None:
        self.client = client

    @staticmethod
    def _scope(catalog_id: str | None) -> dict[str, str]:
        # Glue rejects an empty CatalogId; leave it out to target the caller's account
        return {"CatalogId": catalog_id} if catalog_id else {}

    def get_table(
        self, database: str, table: str, *, catalog_id: str | None = None
    ) -> dict[str, Any]:
        """Return the table definition, raising TableNotFound when Glue has none."""
        try:
            resp = self.client.get_table(
                DatabaseName=database, Name=table, **self._scope(catalog_id)
            )
        except ClientError as exc:
            if error_code(exc) == NOT_FOUND_CODE:
                raise TableNotFound(database, table) from exc
            raise
        return resp.get("Table", {})

    def create_table(
        self,
        database: str,
        table_input: dict[str, Any],
        *,
        catalog_id: str | None = None,
    ) -> None:
        """Create a table."""
        self.client.create_table(
            DatabaseName=database, TableInput=table_input, **self._scope(catalog_id)
        )

    def update_table(
        self,
        database: str,
        table_input: dict[str, Any],
        *,
        catalog_id: str | None = None,
    ) -> None:
        """Update a table in place."""
        self.client.update_table(
            DatabaseName=database, TableInput=table_input, **self._scope(catalog_id)
        )
