"""Activity logging package."""

from pocket_ledger.activity.logger import ActivityLogger, configure_logging

__all__ = ["ActivityLogger", "configure_logging"]
