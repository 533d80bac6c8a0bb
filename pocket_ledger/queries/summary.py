"""
Summary Aggregation Engine

DESIGN DECISION: Summaries are DETERMINISTIC and recomputed on every call.
The engine is a pure function of:
- the ledger contents, in stored order
- the current budget
- the target month/year
- "now", taken from an injected clock

Nothing is cached and nothing is written back. Two calls with the same
inputs return equal summaries.

ORDERING CONTRACT: `history` lists in-scope transactions in reverse stored
order (the last appended row comes first). This is part of the output, not
a display detail.
"""

import calendar
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional

from pocket_ledger.errors import InvalidPeriodError
from pocket_ledger.models.ledger import (
    DEFAULT_BUDGET,
    Summary,
    Transaction,
    TransactionType,
)


Clock = Callable[[], datetime]


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, leap years included."""
    return calendar.monthrange(year, month)[1]


def _as_int(value: Any, label: str) -> int:
    """Accept ints and integral strings such as "3" from a form."""
    if isinstance(value, bool):
        raise InvalidPeriodError(f"{label} must be a whole number (got {value!r})")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidPeriodError(f"{label} must be a whole number (got {value!r})")


class SummaryEngine:
    """
    Turns a flat transaction log into a monthly Summary.

    GUARANTEES:
    - Only transactions dated in the target month and year are counted
    - Unknown types appear in history but never in totals
    - Investments reduce the balance but are not expenses
    """

    def __init__(self, clock: Clock = datetime.now):
        self._clock = clock

    def compute(
        self,
        transactions: Iterable[Transaction],
        budget: Decimal = DEFAULT_BUDGET,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Summary:
        """
        Compute the summary for one calendar month.

        Args:
            transactions: Ledger contents in stored order
            budget: Current monthly budget, passed through unchanged
            month: Target month (1-12), defaults to the current month
            year: Target year, defaults to the current year

        Integral strings are accepted for month and year.

        Raises:
            InvalidPeriodError: If month is outside 1-12 or either value
                is not a whole number
        """
        now = self._clock()
        month = now.month if month is None else _as_int(month, "Month")
        year = now.year if year is None else _as_int(year, "Year")

        if not 1 <= month <= 12:
            raise InvalidPeriodError(f"Month must be between 1 and 12 (got {month})")

        income = Decimal("0")
        expense = Decimal("0")
        investment = Decimal("0")
        balance = Decimal("0")
        tag_totals: dict[str, Decimal] = {}
        history: list[Transaction] = []

        for tx in transactions:
            if tx.date.month != month or tx.date.year != year:
                continue

            # Each match goes to the front
            history.insert(0, tx)

            kind = tx.kind
            if kind is TransactionType.CREDIT:
                income += tx.amount
                balance += tx.amount
            elif kind is TransactionType.DEBIT:
                expense += tx.amount
                balance -= tx.amount
                tag_totals[tx.tag] = tag_totals.get(tx.tag, Decimal("0")) + tx.amount
            elif kind is TransactionType.INVESTMENT:
                investment += tx.amount
                balance -= tx.amount

        return Summary(
            month=month,
            year=year,
            balance=balance,
            income=income,
            expense=expense,
            investment=investment,
            expense_tag_totals=tag_totals,
            history=history,
            budget=budget,
            days_left=self.days_left(month, year, now),
        )

    @staticmethod
    def days_left(month: int, year: int, now: datetime) -> int:
        """Days remaining in the month, or 0 unless it is the current month."""
        if month != now.month or year != now.year:
            return 0
        return max(0, days_in_month(year, month) - now.day)


def compute_summary(
    transactions: Iterable[Transaction],
    budget: Decimal = DEFAULT_BUDGET,
    month: Optional[int] = None,
    year: Optional[int] = None,
    clock: Clock = datetime.now,
) -> Summary:
    """Convenience wrapper around SummaryEngine.compute."""
    return SummaryEngine(clock).compute(transactions, budget, month, year)
