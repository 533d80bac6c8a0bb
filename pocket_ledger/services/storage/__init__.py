"""
Storage Services Package

Provides the tabular store abstraction, its backends, and the ledger,
reminder and settings stores built on top of it.
Currently implements Google Sheets as the backend, but designed to be swappable.
"""

from pocket_ledger.services.storage.interface import (
    TabularStore,
    Table,
)
from pocket_ledger.services.storage.memory import (
    InMemoryTable,
    InMemoryTabularStore,
)
from pocket_ledger.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsStore,
    GoogleSheetsTable,
    SheetsConnectionError,
)
from pocket_ledger.services.storage.repositories import (
    REMINDERS_SCHEMA,
    SETTINGS_SCHEMA,
    TRANSACTIONS_SCHEMA,
    LedgerStore,
    ReminderStore,
    SettingsStore,
    TableSchema,
    new_record_id,
)

__all__ = [
    # Interfaces
    "TabularStore",
    "Table",
    # In-memory implementation
    "InMemoryTable",
    "InMemoryTabularStore",
    # Google Sheets implementation
    "GoogleSheetsClient",
    "GoogleSheetsStore",
    "GoogleSheetsTable",
    "SheetsConnectionError",
    # Stores
    "REMINDERS_SCHEMA",
    "SETTINGS_SCHEMA",
    "TRANSACTIONS_SCHEMA",
    "LedgerStore",
    "ReminderStore",
    "SettingsStore",
    "TableSchema",
    "new_record_id",
]
