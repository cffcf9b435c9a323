"""
Household Ledger - Analytics Package

The analytics engine behind a household shared-expense tracker.
Callers hand over a snapshot of transactions (plus budgets, members,
a selected month and "today"); the engine hands back derived views.

DESIGN PRINCIPLES:
1. Pure functions over an immutable snapshot
2. No clock, no storage, no network inside the engine
3. Degenerate data yields empty views, never exceptions
4. Every dashboard build is auditable
"""

__version__ = "1.0.0"
__author__ = "Household Ledger Team"
