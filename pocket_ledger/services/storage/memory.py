"""
In-Memory Tabular Store

Keeps tables as lists of string rows, the same shape Google Sheets returns
from `get_all_values()`. Used by the test suite and by the `memory` storage
backend for local experiments. Nothing survives the process.
"""

from typing import Any, Optional

from pocket_ledger.errors import StorageError
from pocket_ledger.services.storage.interface import TabularStore, Table


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


class InMemoryTable(Table):
    """A table held in a Python list."""

    def __init__(self, name: str, rows: Optional[list[list[Any]]] = None):
        self._name = name
        self._rows: list[list[str]] = [
            [_cell(v) for v in row] for row in (rows or [])
        ]

    @property
    def name(self) -> str:
        return self._name

    def read_all(self) -> list[list[str]]:
        # Copies, so callers can't mutate stored rows
        return [list(row) for row in self._rows]

    def append_row(self, row: list[Any]) -> None:
        self._rows.append([_cell(v) for v in row])

    def delete_row(self, index: int) -> None:
        if not 0 <= index < len(self._rows):
            raise StorageError(f"Row {index} out of range in table '{self._name}'")
        del self._rows[index]

    def set_cell(self, row_index: int, col_index: int, value: Any) -> None:
        if not 0 <= row_index < len(self._rows):
            raise StorageError(
                f"Row {row_index} out of range in table '{self._name}'"
            )
        row = self._rows[row_index]
        if col_index >= len(row):
            row.extend([""] * (col_index + 1 - len(row)))
        row[col_index] = _cell(value)


class InMemoryTabularStore(TabularStore):
    """A dict of in-memory tables."""

    def __init__(self):
        self._tables: dict[str, InMemoryTable] = {}

    def get_table(self, name: str) -> Optional[Table]:
        return self._tables.get(name)

    def create_table(self, name: str, header: list[str]) -> Table:
        if name in self._tables:
            raise StorageError(f"Table '{name}' already exists")
        table = InMemoryTable(name, [header])
        self._tables[name] = table
        return table

    def add_table(self, name: str, rows: list[list[Any]]) -> Table:
        """Install a table with pre-existing rows (header included)."""
        table = InMemoryTable(name, rows)
        self._tables[name] = table
        return table
