"""
Activity Logger

DESIGN DECISION: Every write to the ledger, and every failed attempt, is
logged as one structured event. This provides:
1. Debugging capability when the spreadsheet looks wrong
2. A trace of rejected submissions that never reached storage

The activity logger:
- Logs locally through structlog (JSON lines)
- Never writes to the spreadsheet (it is not an audit trail)
"""

import logging
from typing import Optional

import structlog

from pocket_ledger.errors import LedgerError, LedgerValidationError
from pocket_ledger.models.activity import (
    ActivityEvent,
    ActivityEventType,
    ActivitySeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog output) to stderr at `level`."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self):
        self._logger = structlog.get_logger("pocket_ledger.activity")

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at a level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_transaction_added(
        self,
        transaction_id: str,
        tx_type: str,
        amount: str,
        tag: str,
    ) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"{tx_type} of {amount} tagged {tag}",
            details={"type": tx_type, "amount": amount, "tag": tag},
        ))

    def log_transaction_deleted(self, transaction_id: str) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
        ))

    def log_summary_computed(self, month: int, year: int, matched: int) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.SUMMARY_COMPUTED,
            severity=ActivitySeverity.DEBUG,
            entity_type="summary",
            description=f"Summary for {year}-{month:02d} over {matched} transactions",
            details={"month": month, "year": year, "matched": matched},
        ))

    def log_reminder_added(self, reminder_id: str, name: str) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.REMINDER_ADDED,
            entity_type="reminder",
            entity_id=reminder_id,
            description=f"Reminder added: {name}",
        ))

    def log_reminder_deleted(self, reminder_id: str) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.REMINDER_DELETED,
            entity_type="reminder",
            entity_id=reminder_id,
            description="Reminder deleted",
        ))

    def log_reminder_paid(
        self,
        reminder_id: Optional[str],
        transaction_id: str,
    ) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.REMINDER_PAID,
            entity_type="reminder",
            entity_id=reminder_id,
            description="Reminder paid",
            details={"transaction_id": transaction_id},
        ))

    def log_setting_changed(self, key: str) -> None:
        # Values are left out so the PIN never reaches the log
        self.log(ActivityEvent(
            event_type=ActivityEventType.SETTING_CHANGED,
            entity_type="setting",
            entity_id=key,
            description=f"Setting changed: {key}",
        ))

    def log_pin_check(self, accepted: bool) -> None:
        self.log(ActivityEvent(
            event_type=(
                ActivityEventType.PIN_VERIFIED
                if accepted
                else ActivityEventType.PIN_REJECTED
            ),
            severity=ActivitySeverity.INFO if accepted else ActivitySeverity.WARNING,
            entity_type="setting",
            entity_id="PIN",
            description="PIN accepted" if accepted else "PIN rejected",
        ))

    def log_table_created(self, table_name: str) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.TABLE_CREATED,
            entity_type="table",
            entity_id=table_name,
            description=f"Created table {table_name}",
        ))

    def log_setup_completed(self, created: list[str]) -> None:
        self.log(ActivityEvent(
            event_type=ActivityEventType.SETUP_COMPLETED,
            description=f"Setup completed, {len(created)} table(s) created",
            details={"created": created},
        ))

    def log_failure(self, operation: str, error: LedgerError) -> None:
        """Log a failed operation. Validation failures are warnings, the rest errors."""
        is_validation = isinstance(error, LedgerValidationError)
        self.log(ActivityEvent(
            event_type=(
                ActivityEventType.VALIDATION_FAILED
                if is_validation
                else ActivityEventType.OPERATION_FAILED
            ),
            severity=ActivitySeverity.WARNING if is_validation else ActivitySeverity.ERROR,
            description=f"{operation} failed",
            error_kind=error.kind.value,
            error_message=error.message,
            details={"operation": operation},
        ))
