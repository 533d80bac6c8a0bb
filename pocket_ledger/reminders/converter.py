"""
Reminder-to-Transaction Converter

Paying a reminder records a new ledger entry dated today. The reminder
itself is only read: it stays in the Reminder Store and can be paid again
next cycle. There is no paid flag and no automatic scheduling.

The generated transaction goes through the same validation as a manual
entry. A failure there is re-raised as PaymentFailedError so the caller
can tell "this reminder can't be paid" apart from a bad form submission.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Union

from pocket_ledger.errors import ErrorKind, LedgerValidationError, PaymentFailedError
from pocket_ledger.models.ledger import PaymentReceipt, Reminder, ReminderType
from pocket_ledger.services.storage import LedgerStore
from pocket_ledger.validation import validate_transaction


ReminderLike = Union[Reminder, Mapping]


def _get(reminder: ReminderLike, name: str) -> Any:
    if isinstance(reminder, Mapping):
        return reminder.get(name)
    return getattr(reminder, name, None)


def payment_note(name: str) -> str:
    return f"Paid: {name} (Reminder)"


class ReminderConverter:
    """Builds, validates and stores the transaction for a paid reminder."""

    def __init__(
        self,
        ledger: LedgerStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._ledger = ledger
        self._clock = clock

    def build_candidate(self, reminder: ReminderLike) -> dict[str, Any]:
        """The unvalidated transaction a reminder turns into."""
        name = _get(reminder, "name")
        return {
            "amount": _get(reminder, "amount"),
            "date": self._clock().date(),
            "type": _get(reminder, "type"),
            "tag": _get(reminder, "tag"),
            "note": payment_note("" if name is None else str(name).strip()),
        }

    def pay(self, reminder: ReminderLike) -> PaymentReceipt:
        """
        Record one payment of `reminder` in the ledger.

        Raises:
            PaymentFailedError: If the generated transaction fails validation
                or would record a Credit
            StorageError: If the ledger write fails
        """
        name = str(_get(reminder, "name") or "").strip()
        candidate = self.build_candidate(reminder)

        try:
            draft = validate_transaction(candidate).unwrap()
            # A reminder never records income
            if draft.type.value not in {t.value for t in ReminderType}:
                raise LedgerValidationError(
                    ErrorKind.INVALID_TYPE,
                    f"Reminder type must be Debit or Investment (got {draft.type.value!r})",
                    field="type",
                )
        except LedgerValidationError as e:
            raise PaymentFailedError(name, e) from e

        transaction_id = self._ledger.append(draft)

        return PaymentReceipt(
            transaction_id=transaction_id,
            reminder_id=_get(reminder, "id"),
            message=f"Paid {name}: {draft.amount} recorded as {draft.type.value}",
        )
