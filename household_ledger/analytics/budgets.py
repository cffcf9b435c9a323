"""
Budget Progress

Compares a month's spending per category against the household's
category budgets. Percentages are NOT capped: 150 means the budget
was blown by half. Clamping for progress bars is left to
``BudgetStatus.display_percent``.
"""

from collections.abc import Iterable

from household_ledger.analytics.utils import MonthLike, normalize_month
from household_ledger.models.analytics import BudgetStatus
from household_ledger.models.transaction import Budget, Transaction


def spending_by_category(
    transactions: Iterable[Transaction],
    selected_month: MonthLike,
) -> dict[str, float]:
    """Expense totals per category for one month, in first-seen order."""
    month = normalize_month(selected_month)
    totals: dict[str, float] = {}
    for txn in transactions:
        if txn.is_income or txn.month != month:
            continue
        totals[txn.category] = totals.get(txn.category, 0.0) + float(txn.amount)
    return totals


def compute_budget_status(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    selected_month: MonthLike,
) -> list[BudgetStatus]:
    """
    Status of every budget for ``selected_month``, in budget order.

    Budgeted categories without spending are reported with zero spent.
    Categories without a budget are not reported.
    """
    spent_by_category = spending_by_category(transactions, selected_month)

    statuses = []
    for budget in budgets:
        spent = spent_by_category.get(budget.category, 0.0)
        limit = float(budget.amount_limit)
        statuses.append(BudgetStatus(
            category=budget.category,
            spent=spent,
            limit=limit,
            percent_used=spent / limit * 100 if limit > 0 else 0.0,
        ))
    return statuses
