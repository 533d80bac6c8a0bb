"""
Abstract Tabular Store Interface

DESIGN DECISION: The ledger never talks to a spreadsheet API directly.
It talks to a small table abstraction. This allows us to:
1. Swap Google Sheets for another backend later
2. Use in-memory storage for testing
3. Keep validation and aggregation pure and testable

The interface is intentionally simple - we're not building a full ORM.
A table is a list of string rows whose first row is the header.

Row and column indices are 0-based positions in the `read_all()` output,
so index 0 is the header row.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class Table(ABC):
    """A named table of rows. The first row is the header."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Table name."""
        pass

    @abstractmethod
    def read_all(self) -> list[list[str]]:
        """
        Read every row including the header.

        Returns:
            Rows in stored order. An empty table returns an empty list.
        """
        pass

    @abstractmethod
    def append_row(self, row: list[Any]) -> None:
        """
        Append a row at the end of the table.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete_row(self, index: int) -> None:
        """
        Delete the row at `index` (0-based, header is 0).

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def set_cell(self, row_index: int, col_index: int, value: Any) -> None:
        """
        Overwrite a single cell.

        Args:
            row_index: 0-based row position (header is 0)
            col_index: 0-based column position
            value: New cell value

        Raises:
            StorageError: If the write fails
        """
        pass


class TabularStore(ABC):
    """
    A collection of named tables.

    Any storage backend (Google Sheets, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    def get_table(self, name: str) -> Optional[Table]:
        """
        Look up a table by name.

        Returns:
            The table if it exists, None otherwise
        """
        pass

    @abstractmethod
    def create_table(self, name: str, header: list[str]) -> Table:
        """
        Create a table with a header row. Setup-time only.

        Returns:
            The newly created table
        """
        pass
