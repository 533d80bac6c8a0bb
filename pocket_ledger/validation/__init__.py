"""Validation package."""

from pocket_ledger.validation.validator import (
    get_user_friendly_message,
    parse_amount,
    parse_date,
    parse_day,
    validate_budget,
    validate_pin,
    validate_reminder,
    validate_transaction,
)

__all__ = [
    "get_user_friendly_message",
    "parse_amount",
    "parse_date",
    "parse_day",
    "validate_budget",
    "validate_pin",
    "validate_reminder",
    "validate_transaction",
]
