"""
Recurring Charge Detection

Finds subscriptions and other repeating expenses in a transaction
snapshot.

HOW A GROUP QUALIFIES:
1. Expenses are grouped by description, trimmed and lowercased.
   Matching is exact after that; "Netflix" and "Netflix.com" are
   different charges.
2. A group needs at least two occurrences.
3. The median gap between consecutive occurrences must fall inside
   one of the frequency windows below. The windows leave gaps
   (11, 19-24, 39-79, 101+ days) on purpose; a median in a gap is
   noise, not a pattern.
4. The gaps must be regular: population standard deviation of the
   intervals may not exceed 35% of the median.

Results are ranked by monthly-equivalent cost, most expensive first.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from household_ledger.analytics.utils import (
    add_days,
    days_between,
    mean,
    median,
    population_std_dev,
    round_half_up,
)
from household_ledger.models.analytics import (
    Frequency,
    RecurringItem,
    RecurringSummary,
)
from household_ledger.models.transaction import Transaction


# Inclusive (low, high) bounds on the median interval, in days
FREQUENCY_WINDOWS: list[tuple[Frequency, float, float]] = [
    (Frequency.WEEKLY, 5, 10),
    (Frequency.BIWEEKLY, 12, 18),
    (Frequency.MONTHLY, 25, 38),
    (Frequency.QUARTERLY, 80, 100),
]

MAX_RELATIVE_STD_DEV = 0.35
MIN_OCCURRENCES = 2
PRICE_CHANGE_EPSILON = 0.01


def normalize_description(description: str) -> str:
    """Grouping key for a transaction description."""
    return description.strip().lower()


def classify_frequency(median_interval: float) -> Optional[Frequency]:
    """Map a median interval to a frequency, or None when it fits no window."""
    for frequency, low, high in FREQUENCY_WINDOWS:
        if low <= median_interval <= high:
            return frequency
    return None


def monthly_equivalent(amount: float, frequency: Frequency) -> float:
    """Average cost per month of ``amount`` billed at ``frequency``."""
    return frequency.monthly_equivalent(amount)


def compute_intervals(dates: Sequence[date]) -> list[int]:
    """Day gaps between consecutive dates."""
    return [days_between(dates[i - 1], dates[i]) for i in range(1, len(dates))]


def is_consistent(intervals: Sequence[float], median_interval: float) -> bool:
    """Are the intervals regular enough to call a pattern?"""
    return population_std_dev(intervals) <= median_interval * MAX_RELATIVE_STD_DEV


def price_change_percent(amounts: Sequence[float]) -> Optional[float]:
    """
    Percent change between the last two amounts.

    None when there is no earlier amount, the earlier amount is zero,
    or the difference is within a cent.
    """
    if len(amounts) < 2:
        return None
    prev, last = amounts[-2], amounts[-1]
    if prev <= 0 or abs(last - prev) <= PRICE_CHANGE_EPSILON:
        return None
    return round_half_up((last - prev) / prev * 1000, 0) / 10


def group_expenses(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    """Expenses keyed by normalized description, in first-seen order."""
    groups: dict[str, list[Transaction]] = {}
    for txn in transactions:
        if txn.is_income:
            continue
        groups.setdefault(normalize_description(txn.description), []).append(txn)
    return groups


def analyze_group(key: str, group: Sequence[Transaction]) -> Optional[RecurringItem]:
    """
    Build a RecurringItem from one description group.

    Returns None when the group does not repeat regularly.
    """
    if len(group) < MIN_OCCURRENCES:
        return None

    ordered = sorted(group, key=lambda t: t.date)
    intervals = compute_intervals([t.date for t in ordered])

    median_interval = median(intervals)
    frequency = classify_frequency(median_interval)
    if frequency is None:
        return None

    if not is_consistent(intervals, median_interval):
        return None

    amounts = [float(t.amount) for t in ordered]
    latest = ordered[-1]

    return RecurringItem(
        group_key=key,
        description=latest.description,
        category=latest.category,
        avg_amount=mean(amounts),
        frequency=frequency,
        occurrences=len(ordered),
        last_date=latest.date,
        next_expected_date=add_days(latest.date, frequency.days),
        amounts=amounts,
        price_change_percent=price_change_percent(amounts),
    )


def detect_recurring(transactions: Iterable[Transaction]) -> list[RecurringItem]:
    """
    Detect recurring expenses in a transaction snapshot.

    Income is ignored. An empty snapshot, or one without any regular
    pattern, yields an empty list.
    """
    results = []
    for key, group in group_expenses(transactions).items():
        item = analyze_group(key, group)
        if item is not None:
            results.append(item)

    results.sort(key=lambda item: item.monthly_equivalent, reverse=True)
    return results


def summarize_recurring(transactions: Iterable[Transaction]) -> RecurringSummary:
    """Recurring charges with their combined monthly and yearly cost."""
    items = detect_recurring(transactions)
    total_monthly = sum(item.monthly_equivalent for item in items)
    return RecurringSummary(
        items=items,
        total_monthly=total_monthly,
        total_yearly=total_monthly * 12,
    )


def upcoming_recurring(
    items: Iterable[RecurringItem],
    today: date,
    window_days: int = 7,
) -> list[RecurringItem]:
    """Recurring charges expected between ``today`` and ``window_days`` ahead."""
    return [item for item in items if item.is_due_soon(today, window_days)]
