"""
Month Overview

The headline view of the dashboard for a selected month: totals,
who paid what, who owes whom, where the money went, how the month
compares to the ones before it, and the biggest individual expenses.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

from household_ledger.analytics.budgets import spending_by_category
from household_ledger.analytics.utils import (
    MonthLike,
    format_money,
    month_label,
    normalize_month,
    round_half_up,
    shift_month,
)
from household_ledger.models.analytics import (
    CategoryTotal,
    MemberBreakdown,
    MonthOverview,
    TrendPoint,
)
from household_ledger.models.transaction import (
    ExpenseType,
    HouseholdMember,
    Transaction,
)


def available_months(transactions: Iterable[Transaction]) -> list[str]:
    """Distinct months with data, newest first."""
    return sorted({txn.month for txn in transactions}, reverse=True)


def transactions_in_month(
    transactions: Iterable[Transaction],
    selected_month: MonthLike,
) -> list[Transaction]:
    month = normalize_month(selected_month)
    return [txn for txn in transactions if txn.month == month]


def _rank_categories(totals: dict[str, float]) -> list[CategoryTotal]:
    """Largest category first, each with its whole-percent share."""
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    grand_total = sum(totals.values())
    return [
        CategoryTotal(
            category=category,
            amount=amount,
            share_percent=(
                round_half_up(amount / grand_total * 100, 0) if grand_total > 0 else 0.0
            ),
        )
        for category, amount in ranked
    ]


def category_breakdown(
    transactions: Iterable[Transaction],
    selected_month: MonthLike,
) -> list[CategoryTotal]:
    """Expense totals by category for one month, largest first."""
    return _rank_categories(spending_by_category(transactions, selected_month))


def top_expenses(
    transactions: Iterable[Transaction],
    selected_month: MonthLike,
    limit: int = 10,
) -> list[Transaction]:
    """The month's largest individual expenses."""
    expenses = [t for t in transactions_in_month(transactions, selected_month) if not t.is_income]
    expenses.sort(key=lambda t: t.amount, reverse=True)
    return expenses[:limit]


def monthly_trend(
    transactions: Iterable[Transaction],
    selected_month: MonthLike,
    months: int = 6,
) -> list[TrendPoint]:
    """
    Income against expenses for the ``months`` calendar months ending
    at ``selected_month``, oldest first. Months without data are
    included with zero totals.
    """
    window = [shift_month(selected_month, -offset) for offset in range(months - 1, -1, -1)]
    totals = {month: [0.0, 0.0] for month in window}

    for txn in transactions:
        entry = totals.get(txn.month)
        if entry is None:
            continue
        entry[0 if txn.is_income else 1] += float(txn.amount)

    return [
        TrendPoint(
            month=month,
            label=month_label(month),
            income=totals[month][0],
            expenses=totals[month][1],
        )
        for month in window
    ]


def _member_breakdown(
    member: HouseholdMember,
    shared: Sequence[Transaction],
    personal: Sequence[Transaction],
) -> MemberBreakdown:
    own_personal = [t for t in personal if t.paid_by == member.id]
    personal_totals: dict[str, float] = {}
    for txn in own_personal:
        personal_totals[txn.category] = personal_totals.get(txn.category, 0.0) + float(txn.amount)

    return MemberBreakdown(
        member_id=member.id,
        display_name=member.display_name,
        shared_paid=sum(float(t.amount) for t in shared if t.paid_by == member.id),
        personal_total=sum(personal_totals.values()),
        personal_categories=_rank_categories(personal_totals),
    )


def settlement_message(
    first: MemberBreakdown,
    second: MemberBreakdown,
    balance_owed: float,
    currency_symbol: str = "€",
) -> str:
    """Plain-language statement of who owes whom."""
    if balance_owed > 0:
        return f"{second.display_name} owes {first.display_name} {format_money(balance_owed, currency_symbol)}"
    if balance_owed < 0:
        return f"{first.display_name} owes {second.display_name} {format_money(-balance_owed, currency_symbol)}"
    return "Settled"


def compute_month_overview(
    transactions: Sequence[Transaction],
    members: Sequence[HouseholdMember],
    selected_month: MonthLike,
    trend_months: int = 6,
    top_limit: int = 10,
    currency_symbol: str = "€",
) -> MonthOverview:
    """
    Totals and per-member split for ``selected_month``.

    Shared spending only counts what household members paid, summed
    over every listed member. The balance between two members is the
    difference of what each put into shared expenses; it is only
    computed for exactly two members.
    """
    month = normalize_month(selected_month)
    in_month = transactions_in_month(transactions, month)

    income = [t for t in in_month if t.is_income]
    expenses = [t for t in in_month if not t.is_income]
    shared = [t for t in expenses if t.expense_type == ExpenseType.SHARED]
    personal = [t for t in expenses if t.expense_type == ExpenseType.PERSONAL]

    breakdowns = [_member_breakdown(m, shared, personal) for m in members]

    shared_total = sum(b.shared_paid for b in breakdowns)
    personal_total = sum(float(t.amount) for t in personal)
    total_income = sum(float(t.amount) for t in income)
    total_spending = shared_total + personal_total

    balance_owed: Optional[float] = None
    settlement: Optional[str] = None
    if len(breakdowns) == 2:
        first, second = breakdowns
        balance_owed = first.shared_paid - second.shared_paid
        settlement = settlement_message(first, second, balance_owed, currency_symbol)

    return MonthOverview(
        month=month,
        total_income=total_income,
        total_spending=total_spending,
        net_balance=total_income - total_spending,
        shared_total=shared_total,
        personal_total=personal_total,
        members=breakdowns,
        balance_owed=balance_owed,
        settlement=settlement,
        categories=category_breakdown(transactions, month),
        trend=monthly_trend(transactions, month, trend_months),
        top_expenses=top_expenses(transactions, month, top_limit),
    )
