"""
Savings Rate and Financial Independence

Buckets transactions by calendar month and answers two questions:
how much of its income does the household keep, and at that pace
how long until it is financially independent.

FI MATH:
The household is independent once savings reach 25x annual expenses
(the 4% safe withdrawal rule). Starting from zero and earning a 5%
real return, the number of years at savings rate ``s`` is

    n = ln(1 + 25 * (1 - s) * r / s) / ln(1 + r)
"""

import math
from collections.abc import Iterable, Sequence
from typing import Optional

from household_ledger.analytics.utils import month_label, percent_of, round_half_up
from household_ledger.models.analytics import MonthSummary, SavingsOverview
from household_ledger.models.transaction import Transaction


FI_REAL_RETURN = 0.05
FI_EXPENSE_MULTIPLE = 25


def savings_rate(income: float, expenses: float) -> float:
    """Percent of income kept, rounded to one decimal. Zero without income."""
    if income <= 0:
        return 0.0
    return round_half_up((income - expenses) / income * 100, 1)


def compute_monthly_summaries(transactions: Iterable[Transaction]) -> list[MonthSummary]:
    """
    One MonthSummary per month present in the snapshot, oldest first.

    Income and expenses are accumulated separately and never netted
    against each other inside a transaction.
    """
    buckets: dict[str, list[float]] = {}
    for txn in transactions:
        entry = buckets.setdefault(txn.month, [0.0, 0.0])
        if txn.is_income:
            entry[0] += float(txn.amount)
        else:
            entry[1] += float(txn.amount)

    return [
        MonthSummary(
            month=month,
            label=month_label(month),
            income=income,
            expenses=expenses,
            savings_rate=savings_rate(income, expenses),
        )
        for month, (income, expenses) in sorted(buckets.items())
    ]


def rolling_savings_rate(summaries: Sequence[MonthSummary], months: int) -> Optional[float]:
    """
    Savings rate over the last ``months`` buckets.

    Uses aggregate income and expenses so a month without income does
    not distort the figure. None when there are fewer buckets than
    requested or no income in the window.
    """
    if months < 1 or len(summaries) < months:
        return None

    recent = summaries[-months:]
    total_income = sum(s.income for s in recent)
    total_expenses = sum(s.expenses for s in recent)
    if total_income == 0:
        return None
    return percent_of(total_income - total_expenses, total_income)


def years_to_financial_independence(rate: float) -> Optional[float]:
    """
    Years until FI at a savings rate given in percent (0-100).

    None when nothing is being saved; 0 when everything is.
    """
    if rate <= 0:
        return None
    if rate >= 100:
        return 0.0

    s = rate / 100
    r = FI_REAL_RETURN
    years = math.log(1 + FI_EXPENSE_MULTIPLE * (1 - s) * r / s) / math.log(1 + r)
    return round_half_up(years, 1)


def has_income(summaries: Iterable[MonthSummary]) -> bool:
    return any(s.income > 0 for s in summaries)


def compute_savings_overview(
    transactions: Iterable[Transaction],
    trend_months: int = 6,
) -> Optional[SavingsOverview]:
    """
    Savings view anchored on the latest month of data.

    Returns None when no income has ever been recorded; the caller
    should show "not enough data" rather than an error.
    """
    summaries = compute_monthly_summaries(transactions)
    if not has_income(summaries):
        return None

    current = summaries[-1]
    return SavingsOverview(
        months=summaries,
        current=current,
        rolling_3=rolling_savings_rate(summaries, 3),
        rolling_12=rolling_savings_rate(summaries, 12),
        years_to_fi=years_to_financial_independence(current.savings_rate),
        trend=summaries[-trend_months:] if trend_months > 0 else [],
    )
