"""
Data Models Package

This package contains all Pydantic models used in Pocket Ledger.
Everything written to or derived from the ledger conforms to these schemas.
"""

from pocket_ledger.models.ledger import (
    DEFAULT_BUDGET,
    DEFAULT_PIN,
    DEFAULT_REMINDER_TAG,
    PaymentReceipt,
    Reminder,
    ReminderDraft,
    ReminderType,
    SettingKey,
    Summary,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationResult,
)
from pocket_ledger.models.activity import (
    ActivityEvent,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Ledger models
    "DEFAULT_BUDGET",
    "DEFAULT_PIN",
    "DEFAULT_REMINDER_TAG",
    "PaymentReceipt",
    "Reminder",
    "ReminderDraft",
    "ReminderType",
    "SettingKey",
    "Summary",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "ValidationResult",
    # Activity models
    "ActivityEvent",
    "ActivityEventType",
    "ActivitySeverity",
]
