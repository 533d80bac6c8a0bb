"""Shared fixtures: a fixed clock and an in-memory ledger."""

from datetime import datetime

import pytest

from pocket_ledger.config import LedgerSettings
from pocket_ledger.orchestrator import LedgerService
from pocket_ledger.services.storage import InMemoryTabularStore


FIXED_NOW = datetime(2024, 3, 10, 9, 30)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def store():
    return InMemoryTabularStore()


@pytest.fixture
def ledger_settings():
    return LedgerSettings(
        default_budget="20000",
        default_pin="1234",
        reminder_default_tag="Bills",
    )


@pytest.fixture
def service(store, clock, ledger_settings):
    """A LedgerService over a freshly set-up in-memory store."""
    svc = LedgerService(store, clock=clock, ledger_settings=ledger_settings)
    svc.setup()
    return svc
