"""
Activity Models for Pocket Ledger

Every write to the ledger emits one activity event to the local structured
log. This gives:
1. Debugging information when a sheet looks wrong
2. A record of failed attempts that never reached storage

DESIGN DECISION: Activity events are log lines only. They are not written
back to the spreadsheet and cannot be used to reconstruct or undo history.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Ledger
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_DELETED = "transaction_deleted"
    SUMMARY_COMPUTED = "summary_computed"

    # Reminders
    REMINDER_ADDED = "reminder_added"
    REMINDER_DELETED = "reminder_deleted"
    REMINDER_PAID = "reminder_paid"

    # Settings and access
    SETTING_CHANGED = "setting_changed"
    PIN_VERIFIED = "pin_verified"
    PIN_REJECTED = "pin_rejected"

    # Setup
    TABLE_CREATED = "table_created"
    SETUP_COMPLETED = "setup_completed"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    OPERATION_FAILED = "operation_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What record is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of record (e.g., 'transaction', 'reminder', 'setting')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_kind": self.error_kind,
            "error_message": self.error_message,
        }
