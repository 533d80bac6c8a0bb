"""
Main Orchestrator for Pocket Ledger

This module ties together all the components and defines the operations
a presentation layer calls:
1. Summary (ledger + budget → monthly Summary)
2. Transactions (validate → append, delete by id)
3. Reminders (validate → append, delete, pay → ledger entry)
4. Settings and PIN

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches a store without passing validation
- Summaries are recomputed from storage on every call
- Every write and every failure is logged

Every call is synchronous and runs to completion. There is no locking:
one writer per spreadsheet is assumed.
"""

import hmac
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from pocket_ledger.activity import ActivityLogger, configure_logging
from pocket_ledger.config import LedgerSettings, get_settings
from pocket_ledger.errors import InvalidPINError, LedgerError
from pocket_ledger.models.ledger import (
    PaymentReceipt,
    Reminder,
    SettingKey,
    Summary,
    Transaction,
)
from pocket_ledger.queries import SummaryEngine
from pocket_ledger.reminders import ReminderConverter
from pocket_ledger.reminders.converter import ReminderLike
from pocket_ledger.services.storage import (
    REMINDERS_SCHEMA,
    SETTINGS_SCHEMA,
    TRANSACTIONS_SCHEMA,
    GoogleSheetsClient,
    GoogleSheetsStore,
    InMemoryTabularStore,
    LedgerStore,
    ReminderStore,
    SettingsStore,
    TabularStore,
)
from pocket_ledger.validation import (
    parse_amount,
    validate_budget,
    validate_pin,
    validate_reminder,
    validate_transaction,
)


class LedgerService:
    """
    The ledger's call surface.

    Wraps the three stores, the summary engine and the reminder converter.
    All failures surface as LedgerError subclasses.
    """

    def __init__(
        self,
        store: TabularStore,
        clock: Callable[[], datetime] = datetime.now,
        ledger_settings: Optional[LedgerSettings] = None,
        activity_logger: Optional[ActivityLogger] = None,
        table_names: Optional[dict[str, str]] = None,
    ):
        """
        Args:
            store: Tabular store holding the three tables
            clock: Source of "now" for summaries and reminder payments
            ledger_settings: Seed defaults; loaded from the environment if None
            activity_logger: Structured logger; a fresh one if None
            table_names: Optional overrides keyed by schema name
        """
        names = table_names or {}
        self._store = store
        self._clock = clock
        self._defaults = ledger_settings or get_settings().ledger
        self._activity = activity_logger or ActivityLogger()

        self.ledger = LedgerStore(
            store,
            names.get(TRANSACTIONS_SCHEMA.name),
            clock=clock,
        )
        self.reminders = ReminderStore(store, names.get(REMINDERS_SCHEMA.name))
        self.settings = SettingsStore(store, names.get(SETTINGS_SCHEMA.name))

        self._engine = SummaryEngine(clock)
        self._converter = ReminderConverter(self.ledger, clock)

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def setup(self) -> list[str]:
        """
        One-time setup: create missing tables and seed default settings.

        Safe to run again; existing tables and settings are left alone.

        Returns:
            Names of the tables that were created
        """
        created = []
        for repo in (self.ledger, self.reminders, self.settings):
            if self._store.get_table(repo.table_name) is None:
                self._store.create_table(repo.table_name, repo.schema.header)
                self._activity.log_table_created(repo.table_name)
                created.append(repo.table_name)

        existing = self.settings.list_all()
        if SettingKey.BUDGET.value not in existing:
            self.settings.upsert(SettingKey.BUDGET.value, str(self._defaults.default_budget))
        if SettingKey.PIN.value not in existing:
            self.settings.upsert(SettingKey.PIN.value, self._defaults.default_pin)

        self._activity.log_setup_completed(created)
        return created

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def get_summary(
        self,
        search: Optional[str] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Summary:
        """
        Monthly summary for `month`/`year` (defaults: the current month).

        `search` is accepted for caller compatibility and has no effect.
        """
        try:
            transactions = self.ledger.list_all()
            summary = self._engine.compute(transactions, self.get_budget(), month, year)
        except LedgerError as e:
            self._activity.log_failure("get_summary", e)
            raise
        self._activity.log_summary_computed(summary.month, summary.year, len(summary.history))
        return summary

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def list_transactions(self) -> list[Transaction]:
        return self.ledger.list_all()

    def add_transaction(self, candidate: Any) -> dict[str, str]:
        """
        Validate and store a transaction.

        Returns:
            {"id": new transaction id}

        Raises:
            LedgerValidationError: If the candidate is rejected
            StoreMissingError / StorageError: If the ledger can't be written
        """
        try:
            draft = validate_transaction(candidate).unwrap()
            transaction_id = self.ledger.append(draft)
        except LedgerError as e:
            self._activity.log_failure("add_transaction", e)
            raise

        self._activity.log_transaction_added(
            transaction_id, draft.type.value, str(draft.amount), draft.tag
        )
        return {"id": transaction_id}

    def delete_transaction(self, transaction_id: str) -> None:
        """
        Raises:
            NotFoundError: If no transaction has this id
        """
        try:
            self.ledger.delete_by_id(transaction_id)
        except LedgerError as e:
            self._activity.log_failure("delete_transaction", e)
            raise
        self._activity.log_transaction_deleted(transaction_id)

    # -------------------------------------------------------------------------
    # Reminders
    # -------------------------------------------------------------------------

    def get_reminders(self) -> list[Reminder]:
        return self.reminders.list_all()

    def add_reminder(self, candidate: Any) -> dict[str, str]:
        """
        Validate and store a reminder.

        Returns:
            {"id": new reminder id}
        """
        try:
            draft = validate_reminder(
                candidate, default_tag=self._defaults.reminder_default_tag
            ).unwrap()
            reminder_id = self.reminders.append(draft)
        except LedgerError as e:
            self._activity.log_failure("add_reminder", e)
            raise

        self._activity.log_reminder_added(reminder_id, draft.name)
        return {"id": reminder_id}

    def delete_reminder(self, reminder_id: str) -> None:
        try:
            self.reminders.delete_by_id(reminder_id)
        except LedgerError as e:
            self._activity.log_failure("delete_reminder", e)
            raise
        self._activity.log_reminder_deleted(reminder_id)

    def pay_reminder(self, reminder: ReminderLike) -> dict[str, str]:
        """
        Record a payment of `reminder` as a transaction dated today.

        The reminder itself is not changed.

        Returns:
            {"message": ..., "id": new transaction id}

        Raises:
            PaymentFailedError: If the generated transaction is invalid
        """
        receipt = self._pay(reminder)
        return {"message": receipt.message, "id": receipt.transaction_id}

    def pay_reminder_by_id(self, reminder_id: str) -> PaymentReceipt:
        """Look up a stored reminder and pay it."""
        try:
            reminder = self.reminders.get_by_id(reminder_id)
        except LedgerError as e:
            self._activity.log_failure("pay_reminder", e)
            raise
        return self._pay(reminder)

    def _pay(self, reminder: ReminderLike) -> PaymentReceipt:
        try:
            receipt = self._converter.pay(reminder)
        except LedgerError as e:
            self._activity.log_failure("pay_reminder", e)
            raise
        self._activity.log_reminder_paid(receipt.reminder_id, receipt.transaction_id)
        return receipt

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """
        Create or replace a setting. Calling twice leaves one row.

        Budget and PIN are validated like set_budget/set_pin; other keys
        are stored as given.

        Raises:
            LedgerValidationError: If a Budget or PIN value is rejected
        """
        try:
            if key == SettingKey.BUDGET.value:
                value = str(validate_budget(value).unwrap())
            elif key == SettingKey.PIN.value:
                value = validate_pin(value).unwrap()
            self.settings.upsert(key, value)
        except LedgerError as e:
            self._activity.log_failure("set_setting", e)
            raise
        self._activity.log_setting_changed(key)

    def get_budget(self) -> Decimal:
        """Stored budget, or the configured default when missing or unreadable."""
        stored = self.settings.get(SettingKey.BUDGET.value)
        budget = parse_amount(stored)
        return budget if budget is not None else self._defaults.default_budget

    def set_budget(self, value: Any) -> None:
        """
        Raises:
            LedgerValidationError: InvalidAmount unless value is a positive number
        """
        self.set_setting(SettingKey.BUDGET.value, value)

    def set_pin(self, value: Any) -> None:
        """
        Raises:
            LedgerValidationError: InvalidPIN unless value is exactly 4 digits
        """
        self.set_setting(SettingKey.PIN.value, value)

    def verify_pin(self, value: Any) -> bool:
        """True when `value` matches the stored PIN."""
        stored = str(self.settings.get(SettingKey.PIN.value, self._defaults.default_pin))
        candidate = "" if value is None else str(value).strip()
        accepted = hmac.compare_digest(candidate.encode(), stored.strip().encode())
        self._activity.log_pin_check(accepted)
        return accepted

    def unlock(self, value: Any) -> None:
        """
        Raises:
            InvalidPINError: If `value` does not match the stored PIN
        """
        if not self.verify_pin(value):
            raise InvalidPINError()


def create_store(backend: Optional[str] = None) -> TabularStore:
    """Build the configured tabular store backend."""
    backend = backend or get_settings().app.storage_backend
    if backend == "memory":
        return InMemoryTabularStore()
    return GoogleSheetsStore(GoogleSheetsClient())


def create_ledger_service(
    backend: Optional[str] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> LedgerService:
    """
    Factory function to create a LedgerService wired to the configured backend.

    Sheet names come from GoogleSheetsSettings when the Google Sheets
    backend is used.
    """
    app = get_settings().app
    configure_logging(app.log_level)

    backend = backend or app.storage_backend
    store = create_store(backend)

    table_names = None
    if backend == "google_sheets":
        sheets = get_settings().google_sheets
        table_names = {
            TRANSACTIONS_SCHEMA.name: sheets.transactions_sheet_name,
            REMINDERS_SCHEMA.name: sheets.reminders_sheet_name,
            SETTINGS_SCHEMA.name: sheets.settings_sheet_name,
        }

    return LedgerService(store, clock=clock, table_names=table_names)
