"""
Tests for Pocket Ledger models

Test strategy:
1. Unit tests for individual components (models, validators, engine)
2. Integration tests for the service over an in-memory store
3. No real API calls in tests (use mocks)
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pocket_ledger.errors import ErrorKind, LedgerValidationError
from pocket_ledger.models.ledger import (
    Reminder,
    ReminderDraft,
    ReminderType,
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


class TestTransactionModels:
    """Tests for transaction models."""

    def test_transaction_draft_creation(self):
        """Test TransactionDraft model creation."""
        draft = TransactionDraft(
            date=date(2024, 3, 1),
            amount=Decimal("1200.50"),
            type=TransactionType.DEBIT,
            tag="Food",
            note="Groceries",
        )
        assert draft.amount == Decimal("1200.50")
        assert draft.type == TransactionType.DEBIT
        assert draft.note == "Groceries"

    def test_transaction_draft_strips_whitespace(self):
        """Test that whitespace is stripped from tag and note."""
        draft = TransactionDraft(
            date=date(2024, 3, 1),
            amount=Decimal("10"),
            type=TransactionType.CREDIT,
            tag="  Salary  ",
            note="  March  ",
        )
        assert draft.tag == "Salary"
        assert draft.note == "March"

    def test_transaction_draft_rejects_non_positive_amount(self):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValueError):
            TransactionDraft(
                date=date(2024, 3, 1),
                amount=Decimal("0"),
                type=TransactionType.DEBIT,
                tag="Food",
            )

    def test_stored_transaction_kind(self):
        """Known types map to the enum, unknown legacy values to None."""
        known = Transaction(
            id="TX1", date=date(2024, 3, 1), amount=Decimal("5"), type="Investment"
        )
        legacy = Transaction(
            id="TX2", date=date(2024, 3, 1), amount=Decimal("5"), type="Transfer"
        )
        assert known.kind is TransactionType.INVESTMENT
        assert legacy.kind is None
        assert legacy.type == "Transfer"


class TestReminderModels:
    """Tests for reminder models."""

    def test_reminder_default_tag(self):
        """Test that a reminder without a tag is tagged Bills."""
        draft = ReminderDraft(
            name="Rent",
            amount=Decimal("15000"),
            day=1,
            frequency="Monthly",
            type=ReminderType.DEBIT,
        )
        assert draft.tag == "Bills"

    def test_reminder_day_bounds(self):
        """Test day must be between 1 and 31."""
        with pytest.raises(ValueError):
            ReminderDraft(
                name="Rent",
                amount=Decimal("15000"),
                day=32,
                frequency="Monthly",
                type=ReminderType.DEBIT,
            )

    def test_reminder_cannot_be_credit(self):
        """Test that a reminder can never represent income."""
        with pytest.raises(ValueError):
            Reminder(
                id="RM1",
                name="Salary",
                amount=Decimal("50000"),
                day=1,
                frequency="Monthly",
                type="Credit",
            )


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_success_unwraps_value(self):
        result = ValidationResult.success(Decimal("5"))
        assert result.ok is True
        assert result.unwrap() == Decimal("5")

    def test_failure_unwrap_raises_with_kind(self):
        result = ValidationResult.failure(
            ErrorKind.MISSING_TAG, "A category tag is required", field="tag"
        )
        assert result.ok is False
        with pytest.raises(LedgerValidationError) as exc_info:
            result.unwrap()
        assert exc_info.value.kind == ErrorKind.MISSING_TAG
        assert exc_info.value.field == "tag"
        assert "MissingTag" in str(exc_info.value)


class TestSummaryModel:
    """Tests for the derived budget-vs-actual properties."""

    def test_budget_remaining_and_allowance(self):
        summary = Summary(
            month=3,
            year=2024,
            expense=Decimal("12000"),
            budget=Decimal("20000"),
            days_left=20,
        )
        assert summary.budget_remaining == Decimal("8000")
        assert summary.daily_allowance == Decimal("400")
        assert summary.budget_used_ratio == Decimal("0.6")
        assert summary.is_over_budget is False

    def test_over_budget(self):
        summary = Summary(
            month=3,
            year=2024,
            expense=Decimal("25000"),
            budget=Decimal("20000"),
            days_left=5,
        )
        assert summary.is_over_budget is True
        assert summary.budget_remaining == Decimal("-5000")
        assert summary.daily_allowance == Decimal("0")

    def test_allowance_is_zero_outside_current_month(self):
        summary = Summary(month=1, year=2024, budget=Decimal("20000"), days_left=0)
        assert summary.daily_allowance == Decimal("0")


class TestActivityModels:
    """Tests for activity event models."""

    def test_activity_event_creation(self):
        """Test ActivityEvent model creation."""
        event = ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_ADDED,
            description="Debit of 500 tagged Food",
        )
        assert event.event_type == ActivityEventType.TRANSACTION_ADDED
        assert event.severity == ActivitySeverity.INFO
        assert isinstance(event.timestamp, datetime)

    def test_activity_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = ActivityEvent(
            event_type=ActivityEventType.REMINDER_PAID,
            entity_type="reminder",
            entity_id="RMabc",
            description="Reminder paid",
            details={"transaction_id": "TXdef"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "reminder_paid"
        assert log_dict["entity_id"] == "RMabc"
        assert log_dict["details"]["transaction_id"] == "TXdef"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
