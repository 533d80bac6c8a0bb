"""Services package."""

from pocket_ledger.services.storage import (
    GoogleSheetsStore,
    InMemoryTabularStore,
    LedgerStore,
    ReminderStore,
    SettingsStore,
    TabularStore,
)

__all__ = [
    "GoogleSheetsStore",
    "InMemoryTabularStore",
    "LedgerStore",
    "ReminderStore",
    "SettingsStore",
    "TabularStore",
]
