from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from gluesync.core.tables import TableNotFound  # noqa: E402


class FakeCatalog:
    """In-memory catalog adapter that records every call.

    `lookups` scripts the outcome of successive get_table calls: a dict is
    returned, an exception instance is raised, and the literal "missing"
    raises TableNotFound. Once the script runs out the last entry repeats.
    """

    def __init__(self, lookups=None):
        self.lookups = list(lookups or ["missing"])
        self.calls: list[tuple] = []

    def get_table(self, database, table, *, catalog_id=None):
        self.calls.append(("get_table", database, table, catalog_id))
        step = self.lookups.pop(0) if len(self.lookups) > 1 else self.lookups[0]
        if step == "missing":
            raise TableNotFound(database, table)
        if isinstance(step, BaseException):
            raise step
        return step

    def create_table(self, database, table_input, *, catalog_id=None):
        self.calls.append(("create_table", database, table_input, catalog_id))

    def update_table(self, database, table_input, *, catalog_id=None):
        self.calls.append(("update_table", database, table_input, catalog_id))

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_catalog():
    return FakeCatalog
