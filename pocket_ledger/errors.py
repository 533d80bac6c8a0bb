"""
Error Types for Pocket Ledger

DESIGN DECISION: Every failure carries an ErrorKind so callers can branch
on it without parsing messages, and every kind has a distinct message so
the user can tell failures apart.

Errors are raised synchronously to the immediate caller. Nothing in the
service layer retries or queues a failed operation.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Distinguishable failure kinds."""
    # Validation
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_TYPE = "InvalidType"
    MISSING_DATE = "MissingDate"
    MISSING_TAG = "MissingTag"
    MISSING_NAME = "MissingName"
    INVALID_DAY = "InvalidDay"
    MISSING_FREQUENCY = "MissingFrequency"
    INVALID_PIN = "InvalidPIN"
    INVALID_PERIOD = "InvalidPeriod"

    # Storage
    NOT_FOUND = "NotFound"
    STORE_MISSING = "StoreMissing"
    SCHEMA_MISMATCH = "SchemaMismatch"
    STORAGE_FAILURE = "StorageFailure"

    # Reminder conversion
    PAYMENT_FAILED = "PaymentFailed"


class LedgerError(Exception):
    """Base exception for all ledger failures."""

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        if kind is not None:
            self.kind = kind
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class LedgerValidationError(LedgerError):
    """A candidate record was rejected before reaching a store."""

    def __init__(self, kind: ErrorKind, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message, kind)


class InvalidPINError(LedgerValidationError):
    """PIN is malformed or does not match the stored value."""

    def __init__(self, message: str = "PIN is incorrect"):
        super().__init__(ErrorKind.INVALID_PIN, message, field="PIN")


class InvalidPeriodError(LedgerValidationError):
    """Requested summary period is not a real calendar month."""

    def __init__(self, message: str):
        super().__init__(ErrorKind.INVALID_PERIOD, message, field="month")


class PaymentFailedError(LedgerError):
    """
    Paying a reminder failed because the generated transaction was invalid.

    The original validation failure is kept on `reason` and `cause`.
    """

    kind = ErrorKind.PAYMENT_FAILED

    def __init__(self, reminder_name: str, cause: LedgerValidationError):
        self.reason = cause.kind
        self.cause = cause
        super().__init__(
            f"Could not pay reminder '{reminder_name}': {cause.message} "
            f"({cause.kind.value})"
        )


class StorageError(LedgerError):
    """Base exception for storage operations."""

    kind = ErrorKind.STORAGE_FAILURE


class NotFoundError(StorageError):
    """Record not found in storage."""

    kind = ErrorKind.NOT_FOUND


class StoreMissingError(StorageError):
    """
    A required table does not exist.

    This is a setup error, not a data error: the one-time setup has to be
    run before the ledger can be used.
    """

    kind = ErrorKind.STORE_MISSING

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(
            f"Table '{table_name}' does not exist. "
            "Run the one-time setup (LedgerService.setup()) to create it."
        )


class SchemaMismatchError(StorageError):
    """Table header does not match the pinned column layout."""

    kind = ErrorKind.SCHEMA_MISMATCH

    def __init__(self, table_name: str, expected: list[str], found: list[str]):
        self.table_name = table_name
        self.expected = expected
        self.found = found
        super().__init__(
            f"Table '{table_name}' has columns {found}, expected {expected}. "
            "Fix the header row or re-run setup on a fresh spreadsheet."
        )
