"""
Ledger, Reminder and Settings Stores

Each store owns one table and converts between its string rows and the
ledger models. Business logic never sees rows.

DESIGN DECISION: The column layout is a pinned, versioned contract.
Every store checks the header row against its schema on first access and
refuses to read or write a table whose columns are in a different order.
Positions are never guessed from the data.

Ids are "TX"/"RM" followed by a uuid4 token. Timestamp ids collide when two
writes land in the same millisecond; uuid4 ids don't.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional
from uuid import uuid4

import structlog

from pocket_ledger.errors import (
    NotFoundError,
    SchemaMismatchError,
    StoreMissingError,
)
from pocket_ledger.models.ledger import (
    DEFAULT_REMINDER_TAG,
    Reminder,
    ReminderDraft,
    Transaction,
    TransactionDraft,
)
from pocket_ledger.services.storage.interface import TabularStore, Table
from pocket_ledger.validation.validator import parse_day


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TableSchema:
    """Pinned column layout of one table."""

    name: str
    columns: tuple[str, ...]
    # Trailing columns that may be absent on tables created by older versions
    optional_columns: tuple[str, ...] = field(default=())

    @property
    def header(self) -> list[str]:
        return list(self.columns + self.optional_columns)

    def check_header(self, found: list[str], table_name: Optional[str] = None) -> None:
        """Raise SchemaMismatchError unless `found` matches this layout."""
        table_name = table_name or self.name
        cells = [c.strip() for c in found]
        while cells and not cells[-1]:
            cells.pop()

        required = list(self.columns)
        if cells[:len(required)] != required:
            raise SchemaMismatchError(table_name, self.header, cells)

        extra = cells[len(required):]
        if extra != list(self.optional_columns[:len(extra)]):
            raise SchemaMismatchError(table_name, self.header, cells)


TRANSACTIONS_SCHEMA = TableSchema(
    name="Transactions",
    columns=("ID", "Date", "Amount", "Note", "Tag", "Type"),
    optional_columns=("CreatedAt",),
)

REMINDERS_SCHEMA = TableSchema(
    name="Reminders",
    columns=("ID", "Name", "Amount", "Day", "Frequency", "Tag", "Type"),
)

SETTINGS_SCHEMA = TableSchema(
    name="Settings",
    columns=("Key", "Value"),
)


def new_record_id(prefix: str) -> str:
    """Create a collision-free record id such as 'TX3f2a...'."""
    return f"{prefix}{uuid4().hex}"


def _parse_date(value: str) -> date:
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def _parse_timestamp(value: str) -> Optional[datetime]:
    """CreatedAt is optional metadata; an unreadable value reads as None."""
    try:
        return datetime.fromisoformat(value.strip()) if value.strip() else None
    except ValueError:
        return None


class TableRepository:
    """
    Base class for a store backed by one table.

    The table is looked up on every call so a table created by setup after
    the store was built is picked up. The header is checked once.
    """

    schema: TableSchema

    def __init__(
        self,
        store: TabularStore,
        table_name: Optional[str] = None,
        id_factory: Callable[[str], str] = new_record_id,
    ):
        self._store = store
        self._table_name = table_name or self.schema.name
        self._new_id = id_factory
        self._header_checked = False
        self._header: list[str] = []

    @property
    def table_name(self) -> str:
        return self._table_name

    def _table(self) -> Table:
        table = self._store.get_table(self._table_name)
        if table is None:
            raise StoreMissingError(self._table_name)
        return table

    def _checked_rows(self, table: Table) -> list[list[str]]:
        """Read all rows and validate the header. Returns data rows only."""
        rows = table.read_all()
        if not self._header_checked:
            self.schema.check_header(rows[0] if rows else [], self._table_name)
            self._header = [c.strip() for c in rows[0]]
            self._header_checked = True
        return rows[1:]

    def _data_rows(self) -> list[list[str]]:
        return self._checked_rows(self._table())

    def _find_row_index(self, rows: list[list[str]], key: str) -> Optional[int]:
        """Return the 0-based table index (header is 0) of the first row keyed `key`."""
        for idx, row in enumerate(rows, start=1):
            if row and row[0] == key:
                return idx
        return None

    def delete_by_id(self, record_id: str) -> None:
        """
        Delete the first record with a matching id.

        Raises:
            NotFoundError: If no record has this id
            StoreMissingError: If the table doesn't exist
        """
        table = self._table()
        rows = self._checked_rows(table)
        idx = self._find_row_index(rows, record_id)
        if idx is None:
            raise NotFoundError(f"No record with id '{record_id}' in '{self._table_name}'")
        table.delete_row(idx)


class LedgerStore(TableRepository):
    """Append/delete store for transactions."""

    schema = TRANSACTIONS_SCHEMA

    def __init__(
        self,
        store: TabularStore,
        table_name: Optional[str] = None,
        id_factory: Callable[[str], str] = new_record_id,
        clock: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(store, table_name, id_factory)
        self._clock = clock

    def _row_to_transaction(self, row: list[str]) -> Transaction:
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        return Transaction(
            id=safe_get(0),
            date=_parse_date(safe_get(1)),
            amount=Decimal(safe_get(2).strip()),
            note=safe_get(3),
            tag=safe_get(4),
            type=safe_get(5).strip(),
            created_at=_parse_timestamp(safe_get(6)),
        )

    def append(self, draft: TransactionDraft) -> str:
        """Store a validated transaction at the end of the ledger. Returns its id."""
        table = self._table()
        self._checked_rows(table)

        record_id = self._new_id("TX")
        row = [
            record_id,
            draft.date.isoformat(),
            str(draft.amount),
            draft.note,
            draft.tag,
            draft.type.value,
        ]
        # Legacy sheets have no CreatedAt column
        if "CreatedAt" in self._header:
            row.append(self._clock().isoformat(timespec="seconds"))
        table.append_row(row)
        return record_id

    def list_all(self) -> list[Transaction]:
        """
        All transactions in stored order.

        Rows without an id are skipped. Rows whose date or amount can't be
        parsed are skipped with a warning. Unknown types are kept.
        """
        transactions = []
        for position, row in enumerate(self._data_rows(), start=2):
            if not row or not row[0].strip():
                continue
            try:
                transactions.append(self._row_to_transaction(row))
            except (ValueError, InvalidOperation) as e:
                logger.warning(
                    "malformed_row_skipped",
                    table=self._table_name,
                    row=position,
                    error=str(e),
                )
        return transactions


class ReminderStore(TableRepository):
    """Append/delete store for recurring-payment reminders."""

    schema = REMINDERS_SCHEMA

    def _row_to_reminder(self, row: list[str]) -> Reminder:
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        day = parse_day(safe_get(3))
        if day is None:
            raise ValueError(f"Day must be a whole number between 1 and 31 (got {safe_get(3)!r})")

        return Reminder(
            id=safe_get(0),
            name=safe_get(1),
            amount=Decimal(safe_get(2).strip()),
            day=day,
            frequency=safe_get(4),
            tag=safe_get(5, DEFAULT_REMINDER_TAG),
            type=safe_get(6).strip(),
        )

    def append(self, draft: ReminderDraft) -> str:
        """Store a validated reminder. Returns its id."""
        table = self._table()
        self._checked_rows(table)

        record_id = self._new_id("RM")
        table.append_row([
            record_id,
            draft.name,
            str(draft.amount),
            draft.day,
            draft.frequency,
            draft.tag,
            draft.type.value,
        ])
        return record_id

    def list_all(self) -> list[Reminder]:
        """All reminders in stored order. Malformed rows are skipped with a warning."""
        reminders = []
        for position, row in enumerate(self._data_rows(), start=2):
            if not row or not row[0].strip():
                continue
            try:
                reminders.append(self._row_to_reminder(row))
            except (ValueError, InvalidOperation) as e:
                # pydantic.ValidationError is a ValueError
                logger.warning(
                    "malformed_row_skipped",
                    table=self._table_name,
                    row=position,
                    error=str(e),
                )
        return reminders

    def get_by_id(self, record_id: str) -> Reminder:
        for reminder in self.list_all():
            if reminder.id == record_id:
                return reminder
        raise NotFoundError(f"No reminder with id '{record_id}'")


class SettingsStore(TableRepository):
    """Key/value store with upsert semantics. Each key appears at most once."""

    schema = SETTINGS_SCHEMA

    def get(self, key: str, default: Any = None) -> Any:
        """Value stored under `key`, or `default` when the key is absent."""
        for row in self._data_rows():
            if row and row[0] == key:
                return row[1] if len(row) > 1 else ""
        return default

    def upsert(self, key: str, value: Any) -> None:
        """Replace the value for `key`, or append a new pair. Idempotent."""
        table = self._table()
        rows = self._checked_rows(table)
        idx = self._find_row_index(rows, key)
        if idx is None:
            table.append_row([key, value])
        else:
            table.set_cell(idx, 1, value)

    def list_all(self) -> dict[str, str]:
        """All settings. If a key is duplicated by hand, the first row wins."""
        values: dict[str, str] = {}
        for row in self._data_rows():
            if row and row[0] and row[0] not in values:
                values[row[0]] = row[1] if len(row) > 1 else ""
        return values
