"""
Core Data Models for Pocket Ledger

These models define the schemas for everything stored in or derived from
the ledger spreadsheet. They are designed to:
1. Separate validated drafts (what may be written) from stored records
   (what was read back)
2. Keep amounts as Decimal end to end
3. Be cheap to recompute: Summary is never persisted

DESIGN DECISION: Drafts are strict and only ever built by the validation
layer. Stored records are tolerant, because the spreadsheet can be edited
by hand and legacy rows may carry values the validator would reject.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from pocket_ledger.errors import ErrorKind, LedgerValidationError


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Cash-flow direction of a transaction.

    Credit adds to the balance, Debit and Investment subtract from it.
    Only Debit counts as an expense.
    """
    CREDIT = "Credit"
    DEBIT = "Debit"
    INVESTMENT = "Investment"


class ReminderType(str, Enum):
    """A reminder can never represent income."""
    DEBIT = "Debit"
    INVESTMENT = "Investment"


class SettingKey(str, Enum):
    """Reserved keys in the Settings table."""
    BUDGET = "Budget"
    PIN = "PIN"


DEFAULT_BUDGET = Decimal("20000")
DEFAULT_PIN = "1234"
DEFAULT_REMINDER_TAG = "Bills"


# =============================================================================
# TRANSACTIONS
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A validated transaction that has not been stored yet.

    Built only by `validate_transaction`. Has no id: the ledger assigns one
    on append.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    # Calendar date of the cash flow, no time-of-day
    date: date
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive amount"
    )
    type: TransactionType
    tag: str = Field(
        ...,
        min_length=1,
        description="Category label"
    )
    note: str = Field(
        default="",
        description="Free-text note"
    )


class Transaction(BaseModel):
    """
    A transaction as stored in the ledger.

    `type` keeps the raw cell text so rows with unknown types still load;
    use `kind` to get the enum when the value is one we understand.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    amount: Decimal
    type: str
    tag: str = ""
    note: str = ""
    created_at: Optional[datetime] = Field(
        default=None,
        description="Insertion timestamp (missing on legacy rows)"
    )

    @property
    def kind(self) -> Optional[TransactionType]:
        """The typed cash-flow direction, or None for unknown legacy values."""
        try:
            return TransactionType(self.type)
        except ValueError:
            return None


# =============================================================================
# REMINDERS
# =============================================================================

class ReminderDraft(BaseModel):
    """A validated reminder that has not been stored yet."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day-of-month anchor"
    )
    frequency: str = Field(
        ...,
        min_length=1,
        description="Recurrence label, informational only"
    )
    tag: str = Field(default=DEFAULT_REMINDER_TAG, min_length=1)
    type: ReminderType


class Reminder(ReminderDraft):
    """A stored recurring-payment reminder."""

    id: str


# =============================================================================
# VALIDATION RESULT
# =============================================================================

class ValidationResult(BaseModel):
    """
    Outcome of validating a candidate record.

    Either `value` is set (success) or `error` and `message` are set.
    Callers can branch on `ok`, or call `unwrap()` to get the value and let
    the failure propagate as an exception.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    value: Optional[Any] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "ValidationResult":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        error: ErrorKind,
        message: str,
        field: Optional[str] = None,
    ) -> "ValidationResult":
        return cls(error=error, message=message, field=field)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the validated value or raise the matching error."""
        if self.error is not None:
            raise LedgerValidationError(self.error, self.message or "", self.field)
        return self.value


# =============================================================================
# SUMMARY
# =============================================================================

class Summary(BaseModel):
    """
    Derived view of one calendar month of the ledger.

    Never persisted; recomputed on every request.
    """

    month: int = Field(..., ge=1, le=12)
    year: int

    balance: Decimal = Decimal("0")
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    investment: Decimal = Decimal("0")

    expense_tag_totals: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Debit totals per tag"
    )
    history: list[Transaction] = Field(
        default_factory=list,
        description="In-scope transactions, most recently added first"
    )

    budget: Decimal = DEFAULT_BUDGET
    days_left: int = Field(default=0, ge=0)

    @property
    def budget_remaining(self) -> Decimal:
        return self.budget - self.expense

    @property
    def budget_used_ratio(self) -> Decimal:
        """Share of the budget spent on Debits (0 when budget is zero)."""
        if self.budget <= 0:
            return Decimal("0")
        return self.expense / self.budget

    @property
    def is_over_budget(self) -> bool:
        return self.expense > self.budget

    @property
    def daily_allowance(self) -> Decimal:
        """How much can still be spent per remaining day of the month."""
        remaining = self.budget_remaining
        if self.days_left <= 0 or remaining <= 0:
            return Decimal("0")
        return remaining / self.days_left


class PaymentReceipt(BaseModel):
    """Result of paying a reminder."""

    transaction_id: str
    reminder_id: Optional[str] = None
    message: str
