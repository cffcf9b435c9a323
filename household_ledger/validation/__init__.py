"""Input loading and validation package."""

from household_ledger.validation.loader import (
    LoadResult,
    RejectedRecord,
    load_budgets,
    load_members,
    load_transactions,
)

__all__ = [
    "LoadResult",
    "RejectedRecord",
    "load_budgets",
    "load_members",
    "load_transactions",
]
