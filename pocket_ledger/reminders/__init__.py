"""Reminder payment package."""

from pocket_ledger.reminders.converter import ReminderConverter, payment_note

__all__ = ["ReminderConverter", "payment_note"]
