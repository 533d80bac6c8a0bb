"""
Pocket Ledger - Source Package

A personal-finance ledger that keeps its data in a spreadsheet and
derives monthly summaries, budget tracking and reminder payments from it.

DESIGN PRINCIPLES:
1. Validate at the boundary, store only well-formed records
2. Fail early, fail visibly
3. Summaries are always recomputed, never cached
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Pocket Ledger Team"
