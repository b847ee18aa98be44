"""
Pytest configuration.

Adds the project root to the Python path so that tests can import from the
domain, repositories, services, and api modules, and provides an in-memory
stand-in for the Supabase table API used by the repositories.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

# Add the project directory to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class FakeQuery:
    """Chainable query over one in-memory table (select/insert/update/delete)."""

    def __init__(self, table: "FakeTable"):
        self.table = table
        self.action = "select"
        self.payload: Any = None
        self.filters: List[tuple] = []
        self.order_by = None
        self.limit_to = None

    def select(self, _columns: str = "*") -> "FakeQuery":
        self.action = "select"
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.action = "update"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.action = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.limit_to = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> SimpleNamespace:
        rows = self.table.rows
        if self.table.error:
            return SimpleNamespace(data=None, error=self.table.error)

        if self.action == "insert":
            rows.append(dict(self.payload))
            return SimpleNamespace(data=[dict(self.payload)], error=None)

        matched = [row for row in rows if self._matches(row)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched], error=None)

        if self.action == "delete":
            self.table.rows = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=matched, error=None)

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda row: row[column], reverse=desc)
        if self.limit_to is not None:
            matched = matched[: self.limit_to]
        return SimpleNamespace(data=[dict(row) for row in matched], error=None)


class FakeTable:
    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.error = None


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, FakeTable] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, FakeTable()))

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.setdefault(name, FakeTable()).rows

    def fail(self, name: str, error: str) -> None:
        self.tables.setdefault(name, FakeTable()).error = error


@pytest.fixture
def fake_supabase(monkeypatch) -> FakeSupabase:
    """Route every repository's Supabase client to an in-memory fake."""

    from repositories import product_repository, profile_repository, sale_repository

    fake = FakeSupabase()
    for module in (sale_repository, product_repository, profile_repository):
        monkeypatch.setattr(module, "get_supabase", lambda: fake)
    return fake
