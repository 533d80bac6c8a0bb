"""Tests for the validation layer."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pocket_ledger.errors import ErrorKind
from pocket_ledger.models.ledger import ReminderType, TransactionType
from pocket_ledger.validation import (
    get_user_friendly_message,
    parse_day,
    validate_budget,
    validate_pin,
    validate_reminder,
    validate_transaction,
)


def _tx(**overrides):
    candidate = {
        "date": "2024-03-05",
        "amount": "1200",
        "type": "Debit",
        "tag": "Food",
        "note": "Dinner",
    }
    candidate.update(overrides)
    return candidate


def _reminder(**overrides):
    candidate = {
        "name": "Netflix",
        "amount": 500,
        "day": 5,
        "frequency": "Monthly",
        "tag": "Subscriptions",
        "type": "Debit",
    }
    candidate.update(overrides)
    return candidate


class TestValidateTransaction:
    """Tests for validate_transaction."""

    def test_valid_transaction_is_normalized(self):
        """Amount becomes numeric, tag and note are trimmed."""
        result = validate_transaction(_tx(amount=" 1200.50 ", tag="  Food ", note=" Dinner  "))
        assert result.ok
        draft = result.value
        assert draft.amount == Decimal("1200.50")
        assert draft.tag == "Food"
        assert draft.note == "Dinner"
        assert draft.date == date(2024, 3, 5)
        assert draft.type is TransactionType.DEBIT

    def test_missing_note_becomes_empty(self):
        candidate = _tx()
        del candidate["note"]
        assert validate_transaction(candidate).value.note == ""

    @pytest.mark.parametrize("amount", [-5, 0, "abc", None, "", True, float("nan"), "Infinity"])
    def test_invalid_amount(self, amount):
        result = validate_transaction(_tx(amount=amount))
        assert result.error == ErrorKind.INVALID_AMOUNT
        assert result.field == "amount"

    @pytest.mark.parametrize("tx_type", ["Transfer", "debit", "", None, "Credit "])
    def test_invalid_type(self, tx_type):
        result = validate_transaction(_tx(type=tx_type))
        assert result.error == ErrorKind.INVALID_TYPE

    def test_enum_type_is_accepted(self):
        result = validate_transaction(_tx(type=TransactionType.INVESTMENT))
        assert result.value.type is TransactionType.INVESTMENT

    @pytest.mark.parametrize("tx_date", [None, "", "   ", "not a date", "2024-13-01"])
    def test_missing_date(self, tx_date):
        result = validate_transaction(_tx(date=tx_date))
        assert result.error == ErrorKind.MISSING_DATE

    def test_datetime_is_truncated_to_date(self):
        result = validate_transaction(_tx(date=datetime(2024, 3, 5, 23, 59)))
        assert result.value.date == date(2024, 3, 5)

    def test_iso_datetime_string_is_accepted(self):
        result = validate_transaction(_tx(date="2024-03-05T10:15:00"))
        assert result.value.date == date(2024, 3, 5)

    @pytest.mark.parametrize("tag", [None, "", "    "])
    def test_missing_tag(self, tag):
        result = validate_transaction(_tx(tag=tag))
        assert result.error == ErrorKind.MISSING_TAG

    def test_amount_is_checked_first(self):
        """A candidate with several problems reports the amount."""
        result = validate_transaction({"amount": -1, "type": "Transfer"})
        assert result.error == ErrorKind.INVALID_AMOUNT

    def test_accepts_objects_with_attributes(self):
        class Form:
            date = "2024-03-05"
            amount = 10
            type = "Credit"
            tag = "Gift"
            note = None

        result = validate_transaction(Form())
        assert result.ok
        assert result.value.amount == Decimal("10")


class TestValidateReminder:
    """Tests for validate_reminder."""

    def test_valid_reminder_is_normalized(self):
        result = validate_reminder(_reminder(name="  Netflix ", amount="499.00", day="5"))
        assert result.ok
        draft = result.value
        assert draft.name == "Netflix"
        assert draft.amount == Decimal("499.00")
        assert draft.day == 5
        assert draft.type is ReminderType.DEBIT

    @pytest.mark.parametrize("tag", [None, "", "  "])
    def test_missing_tag_defaults_to_bills(self, tag):
        result = validate_reminder(_reminder(tag=tag))
        assert result.ok
        assert result.value.tag == "Bills"

    def test_missing_tag_uses_configured_default(self):
        result = validate_reminder(_reminder(tag=None), default_tag="Utilities")
        assert result.value.tag == "Utilities"

    def test_missing_name(self):
        assert validate_reminder(_reminder(name="   ")).error == ErrorKind.MISSING_NAME

    def test_invalid_amount(self):
        assert validate_reminder(_reminder(amount=0)).error == ErrorKind.INVALID_AMOUNT

    @pytest.mark.parametrize("day", [0, 32, 5.5, "abc", None, True, "-1"])
    def test_invalid_day(self, day):
        assert validate_reminder(_reminder(day=day)).error == ErrorKind.INVALID_DAY

    def test_missing_frequency(self):
        assert validate_reminder(_reminder(frequency="")).error == ErrorKind.MISSING_FREQUENCY

    @pytest.mark.parametrize("reminder_type", ["Credit", "Transfer", None])
    def test_invalid_type(self, reminder_type):
        result = validate_reminder(_reminder(type=reminder_type))
        assert result.error == ErrorKind.INVALID_TYPE


class TestParseDay:
    """Tests for day-of-month coercion."""

    @pytest.mark.parametrize("value,expected", [(1, 1), (31, 31), ("15", 15), (7.0, 7), (" 3 ", 3)])
    def test_accepted_values(self, value, expected):
        assert parse_day(value) == expected


class TestSettingValidators:
    """Tests for budget and PIN validation."""

    def test_budget_must_be_positive(self):
        assert validate_budget(-100).error == ErrorKind.INVALID_AMOUNT
        assert validate_budget("lots").error == ErrorKind.INVALID_AMOUNT
        assert validate_budget("25000").value == Decimal("25000")

    @pytest.mark.parametrize("pin", ["12a4", "123", "12345", "", None, " 12 4"])
    def test_invalid_pin(self, pin):
        assert validate_pin(pin).error == ErrorKind.INVALID_PIN

    def test_valid_pin(self):
        assert validate_pin("0042").value == "0042"
        assert validate_pin(9999).value == "9999"


class TestUserFriendlyMessage:
    def test_messages(self):
        assert get_user_friendly_message(validate_pin("1234")).startswith("✅")
        message = get_user_friendly_message(validate_pin("12a4"))
        assert message.startswith("❌")
        assert "4 digits" in message


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
