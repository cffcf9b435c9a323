"""
Analytics Package

Pure functions that reduce a transaction snapshot to derived views.
None of them read the clock, touch storage or mutate their input.
"""

from household_ledger.analytics.budgets import compute_budget_status, spending_by_category
from household_ledger.analytics.overview import (
    available_months,
    category_breakdown,
    compute_month_overview,
    monthly_trend,
    top_expenses,
)
from household_ledger.analytics.recurring import (
    classify_frequency,
    detect_recurring,
    monthly_equivalent,
    summarize_recurring,
    upcoming_recurring,
)
from household_ledger.analytics.savings import (
    compute_monthly_summaries,
    compute_savings_overview,
    rolling_savings_rate,
    years_to_financial_independence,
)
from household_ledger.analytics.utils import InvalidMonthError

__all__ = [
    # Recurring charges
    "classify_frequency",
    "detect_recurring",
    "monthly_equivalent",
    "summarize_recurring",
    "upcoming_recurring",
    # Savings
    "compute_monthly_summaries",
    "compute_savings_overview",
    "rolling_savings_rate",
    "years_to_financial_independence",
    # Budgets
    "compute_budget_status",
    "spending_by_category",
    # Month overview
    "available_months",
    "category_breakdown",
    "compute_month_overview",
    "monthly_trend",
    "top_expenses",
    # Errors
    "InvalidMonthError",
]
