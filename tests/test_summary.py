"""Tests for the summary aggregation engine."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from pocket_ledger.errors import ErrorKind, InvalidPeriodError
from pocket_ledger.models.ledger import Transaction
from pocket_ledger.queries import SummaryEngine, compute_summary, days_in_month


def tx(tx_id, day, amount, tx_type, tag="Misc"):
    return Transaction(
        id=tx_id,
        date=day,
        amount=Decimal(str(amount)),
        type=tx_type,
        tag=tag,
    )


@pytest.fixture
def engine():
    return SummaryEngine(lambda: datetime(2024, 3, 10, 8, 0))


class TestTotals:
    """Accumulation rules per transaction type."""

    def test_salary_and_food(self, engine):
        """Credit of 5000 and Debit of 1200 in the target month."""
        ledger = [
            tx("TX1", date(2024, 3, 1), 5000, "Credit", "Salary"),
            tx("TX2", date(2024, 3, 4), 1200, "Debit", "Food"),
        ]
        summary = engine.compute(ledger, Decimal("20000"), 3, 2024)

        assert summary.income == Decimal("5000")
        assert summary.expense == Decimal("1200")
        assert summary.investment == Decimal("0")
        assert summary.balance == Decimal("3800")
        assert summary.expense_tag_totals == {"Food": Decimal("1200")}

    def test_investment_reduces_balance_but_is_not_expense(self, engine):
        ledger = [
            tx("TX1", date(2024, 3, 1), 1000, "Credit"),
            tx("TX2", date(2024, 3, 2), 300, "Investment", "Stocks"),
        ]
        summary = engine.compute(ledger, Decimal("20000"), 3, 2024)

        assert summary.investment == Decimal("300")
        assert summary.expense == Decimal("0")
        assert summary.balance == Decimal("700")
        assert summary.expense_tag_totals == {}

    def test_debits_roll_up_by_tag(self, engine):
        ledger = [
            tx("TX1", date(2024, 3, 1), 100, "Debit", "Food"),
            tx("TX2", date(2024, 3, 2), 50.25, "Debit", "Travel"),
            tx("TX3", date(2024, 3, 3), 20, "Debit", "Food"),
        ]
        summary = engine.compute(ledger, Decimal("20000"), 3, 2024)

        assert summary.expense_tag_totals == {
            "Food": Decimal("120"),
            "Travel": Decimal("50.25"),
        }
        assert summary.balance == Decimal("-170.25")

    def test_unknown_type_is_listed_but_not_counted(self, engine):
        ledger = [
            tx("TX1", date(2024, 3, 1), 900, "Transfer"),
            tx("TX2", date(2024, 3, 2), 100, "Credit"),
        ]
        summary = engine.compute(ledger, Decimal("20000"), 3, 2024)

        assert summary.income == Decimal("100")
        assert summary.balance == Decimal("100")
        assert [t.id for t in summary.history] == ["TX2", "TX1"]

    def test_empty_ledger(self, engine):
        summary = engine.compute([], Decimal("20000"), 3, 2024)
        assert summary.balance == Decimal("0")
        assert summary.history == []
        assert summary.expense_tag_totals == {}


class TestScope:
    """Month/year scoping and history order."""

    def test_only_target_month_and_year_count(self, engine):
        ledger = [
            tx("TX1", date(2024, 3, 31), 10, "Credit"),
            tx("TX2", date(2024, 4, 1), 20, "Credit"),
            tx("TX3", date(2023, 3, 15), 40, "Credit"),
            tx("TX4", date(2024, 2, 29), 80, "Credit"),
        ]
        summary = engine.compute(ledger, Decimal("20000"), 3, 2024)

        assert summary.income == Decimal("10")
        assert [t.id for t in summary.history] == ["TX1"]

    def test_history_is_reverse_stored_order(self, engine):
        ledger = [
            tx("TX1", date(2024, 3, 20), 1, "Debit"),
            tx("TX2", date(2024, 2, 1), 1, "Debit"),
            tx("TX3", date(2024, 3, 1), 1, "Debit"),
            tx("TX4", date(2024, 3, 15), 1, "Credit"),
        ]
        summary = engine.compute(ledger, Decimal("20000"), 3, 2024)

        # Stored order reversed, not sorted by date
        assert [t.id for t in summary.history] == ["TX4", "TX3", "TX1"]

    def test_defaults_to_current_month(self, engine):
        ledger = [
            tx("TX1", date(2024, 3, 2), 10, "Credit"),
            tx("TX2", date(2024, 2, 2), 20, "Credit"),
        ]
        summary = engine.compute(ledger, Decimal("20000"))

        assert (summary.month, summary.year) == (3, 2024)
        assert summary.income == Decimal("10")

    def test_invalid_month(self, engine):
        with pytest.raises(InvalidPeriodError) as exc_info:
            engine.compute([], Decimal("20000"), 13, 2024)
        assert exc_info.value.kind == ErrorKind.INVALID_PERIOD

    def test_month_and_year_from_form_text(self, engine):
        ledger = [tx("TX1", date(2024, 3, 2), 10, "Credit")]
        summary = engine.compute(ledger, Decimal("20000"), "3", " 2024 ")

        assert (summary.month, summary.year) == (3, 2024)
        assert summary.income == Decimal("10")

    @pytest.mark.parametrize("month", ["March", "3.5", "", True])
    def test_non_numeric_month(self, engine, month):
        with pytest.raises(InvalidPeriodError):
            engine.compute([], Decimal("20000"), month, 2024)


class TestDaysLeft:
    """days_left is only non-zero for the current month."""

    def test_current_month(self, engine):
        # March has 31 days, today is the 10th
        assert engine.compute([], Decimal("20000"), 3, 2024).days_left == 21

    def test_other_month(self, engine):
        assert engine.compute([], Decimal("20000"), 2, 2024).days_left == 0
        assert engine.compute([], Decimal("20000"), 3, 2023).days_left == 0

    def test_last_day_of_month(self):
        engine = SummaryEngine(lambda: datetime(2024, 2, 29, 23, 0))
        assert engine.compute([], Decimal("20000")).days_left == 0

    def test_leap_february(self):
        engine = SummaryEngine(lambda: datetime(2024, 2, 1))
        assert engine.compute([], Decimal("20000")).days_left == 28

    @pytest.mark.parametrize("year,month,expected", [
        (2024, 2, 29),
        (2023, 2, 28),
        (1900, 2, 28),
        (2000, 2, 29),
        (2024, 4, 30),
        (2024, 12, 31),
    ])
    def test_days_in_month(self, year, month, expected):
        assert days_in_month(year, month) == expected


class TestPurity:
    """The engine is a pure read."""

    def test_same_inputs_same_output(self, engine):
        ledger = [
            tx("TX1", date(2024, 3, 1), 5000, "Credit", "Salary"),
            tx("TX2", date(2024, 3, 4), 1200, "Debit", "Food"),
        ]
        first = engine.compute(ledger, Decimal("20000"), 3, 2024)
        second = engine.compute(ledger, Decimal("20000"), 3, 2024)

        assert first == second
        assert [t.id for t in ledger] == ["TX1", "TX2"]

    def test_budget_is_passed_through(self, engine):
        summary = engine.compute([], Decimal("12345"), 1, 2020)
        assert summary.budget == Decimal("12345")

    def test_compute_summary_wrapper(self):
        summary = compute_summary(
            [tx("TX1", date(2024, 3, 1), 10, "Credit")],
            Decimal("20000"),
            clock=lambda: datetime(2024, 3, 30),
        )
        assert summary.income == Decimal("10")
        assert summary.days_left == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
