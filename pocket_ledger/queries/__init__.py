"""Summary queries package."""

from pocket_ledger.queries.summary import SummaryEngine, compute_summary, days_in_month

__all__ = ["SummaryEngine", "compute_summary", "days_in_month"]
