"""
Validation Layer

DESIGN DECISION: Every record is validated before it reaches a store.
Validators are pure functions:
- They accept loosely-shaped input (dicts from a form, or models)
- They never touch storage
- They return a ValidationResult instead of raising, so callers can branch
  on the error kind; `result.unwrap()` raises when propagation is wanted

Checks run in a fixed order and stop at the first failure, so a candidate
with several problems always reports the same one.

IMPORTANT: Validation trims whitespace and coerces numbers, nothing else.
Unknown transaction types are rejected here, not silently dropped later.
"""

import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from pocket_ledger.errors import ErrorKind
from pocket_ledger.models.ledger import (
    DEFAULT_REMINDER_TAG,
    ReminderDraft,
    ReminderType,
    TransactionDraft,
    TransactionType,
    ValidationResult,
)


PIN_PATTERN = re.compile(r"[0-9]{4}")


# =============================================================================
# FIELD PARSERS
# =============================================================================

def _field(candidate: Any, name: str) -> Any:
    """Read a field from a mapping or an object, None when absent."""
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def parse_amount(value: Any) -> Optional[Decimal]:
    """Coerce to a positive, finite Decimal. Returns None when that's impossible."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float)):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            return None
    except InvalidOperation:
        return None

    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def parse_date(value: Any) -> Optional[date]:
    """Coerce to a calendar date. Time of day is dropped."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def parse_day(value: Any) -> Optional[int]:
    """Coerce to an integer day of month in [1, 31]."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        day = value
    elif isinstance(value, (float, Decimal, str)):
        try:
            number = Decimal(value.strip()) if isinstance(value, str) else Decimal(str(value))
        except InvalidOperation:
            return None
        if not number.is_finite() or number != number.to_integral_value():
            return None
        day = int(number)
    else:
        return None

    if not 1 <= day <= 31:
        return None
    return day


# =============================================================================
# VALIDATORS
# =============================================================================

def validate_transaction(candidate: Any) -> ValidationResult:
    """
    Validate a transaction candidate.

    Checks, in order: amount, type, date, tag.

    Returns:
        ValidationResult holding a TransactionDraft on success
    """
    amount = parse_amount(_field(candidate, "amount"))
    if amount is None:
        return ValidationResult.failure(
            ErrorKind.INVALID_AMOUNT,
            "Amount must be a number greater than zero",
            field="amount",
        )

    raw_type = _field(candidate, "type")
    if isinstance(raw_type, Enum):
        raw_type = raw_type.value
    if not isinstance(raw_type, str) or raw_type not in {t.value for t in TransactionType}:
        return ValidationResult.failure(
            ErrorKind.INVALID_TYPE,
            f"Type must be one of Credit, Debit or Investment (got {raw_type!r})",
            field="type",
        )

    tx_date = parse_date(_field(candidate, "date"))
    if tx_date is None:
        return ValidationResult.failure(
            ErrorKind.MISSING_DATE,
            "A valid date is required",
            field="date",
        )

    tag = _text(_field(candidate, "tag"))
    if not tag:
        return ValidationResult.failure(
            ErrorKind.MISSING_TAG,
            "A category tag is required",
            field="tag",
        )

    return ValidationResult.success(TransactionDraft(
        date=tx_date,
        amount=amount,
        type=TransactionType(raw_type),
        tag=tag,
        note=_text(_field(candidate, "note")),
    ))


def validate_reminder(
    candidate: Any,
    default_tag: str = DEFAULT_REMINDER_TAG,
) -> ValidationResult:
    """
    Validate a reminder candidate.

    Checks, in order: name, amount, day, frequency, type.
    A missing tag is never an error; it falls back to `default_tag`.

    Returns:
        ValidationResult holding a ReminderDraft on success
    """
    name = _text(_field(candidate, "name"))
    if not name:
        return ValidationResult.failure(
            ErrorKind.MISSING_NAME,
            "Reminder name is required",
            field="name",
        )

    amount = parse_amount(_field(candidate, "amount"))
    if amount is None:
        return ValidationResult.failure(
            ErrorKind.INVALID_AMOUNT,
            "Amount must be a number greater than zero",
            field="amount",
        )

    day = parse_day(_field(candidate, "day"))
    if day is None:
        return ValidationResult.failure(
            ErrorKind.INVALID_DAY,
            "Day must be a whole number between 1 and 31",
            field="day",
        )

    frequency = _text(_field(candidate, "frequency"))
    if not frequency:
        return ValidationResult.failure(
            ErrorKind.MISSING_FREQUENCY,
            "Frequency is required",
            field="frequency",
        )

    raw_type = _field(candidate, "type")
    if isinstance(raw_type, Enum):
        raw_type = raw_type.value
    if not isinstance(raw_type, str) or raw_type not in {t.value for t in ReminderType}:
        return ValidationResult.failure(
            ErrorKind.INVALID_TYPE,
            f"Reminder type must be Debit or Investment (got {raw_type!r})",
            field="type",
        )

    return ValidationResult.success(ReminderDraft(
        name=name,
        amount=amount,
        day=day,
        frequency=frequency,
        tag=_text(_field(candidate, "tag")) or default_tag,
        type=ReminderType(raw_type),
    ))


def validate_budget(value: Any) -> ValidationResult:
    """A budget must be a positive number."""
    amount = parse_amount(value)
    if amount is None:
        return ValidationResult.failure(
            ErrorKind.INVALID_AMOUNT,
            "Budget must be a number greater than zero",
            field="Budget",
        )
    return ValidationResult.success(amount)


def validate_pin(value: Any) -> ValidationResult:
    """A PIN is exactly four digits."""
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not PIN_PATTERN.fullmatch(value.strip()):
        return ValidationResult.failure(
            ErrorKind.INVALID_PIN,
            "PIN must be exactly 4 digits",
            field="PIN",
        )
    return ValidationResult.success(value.strip())


def get_user_friendly_message(result: ValidationResult) -> str:
    """
    One-line message for showing a validation outcome to the user.
    """
    if result.ok:
        return "✅ Looks good."
    return f"❌ {result.message}"
