"""
Derived Models for Household Ledger

Everything in this module is PRODUCED by the analytics engine.
Nothing here is persisted - every view is recomputed from the
current transaction snapshot on each call.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from household_ledger.models.transaction import Transaction


# =============================================================================
# RECURRING CHARGES
# =============================================================================

class Frequency(str, Enum):
    """Billing frequency inferred from the spacing of a recurring charge."""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def days(self) -> int:
        """Fixed day count used to project the next occurrence."""
        return FREQUENCY_DAYS[self]

    @property
    def label(self) -> str:
        return FREQUENCY_LABELS[self]

    def monthly_equivalent(self, amount: float) -> float:
        """Normalize an amount billed at this frequency to an average month."""
        if self is Frequency.QUARTERLY:
            return amount / 3
        return amount * MONTHLY_MULTIPLIERS[self]


FREQUENCY_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.BIWEEKLY: 14,
    Frequency.MONTHLY: 30,
    Frequency.QUARTERLY: 90,
}

FREQUENCY_LABELS = {
    Frequency.WEEKLY: "Weekly",
    Frequency.BIWEEKLY: "Every 2 weeks",
    Frequency.MONTHLY: "Monthly",
    Frequency.QUARTERLY: "Quarterly",
}

# Quarterly divides by 3 instead of multiplying by 1/3
MONTHLY_MULTIPLIERS = {
    Frequency.WEEKLY: 4.33,
    Frequency.BIWEEKLY: 2.17,
    Frequency.MONTHLY: 1.0,
}


class RecurringItem(BaseModel):
    """
    A charge that repeats at a regular interval.

    ``description`` and ``category`` come from the most recent
    occurrence so the display follows the latest casing.
    """
    model_config = ConfigDict(frozen=True)

    group_key: str = Field(
        ...,
        description="Normalized description the occurrences were grouped by"
    )
    description: str
    category: str
    avg_amount: float = Field(
        ...,
        ge=0,
        description="Mean of all occurrence amounts"
    )
    frequency: Frequency
    occurrences: int = Field(..., ge=2)
    last_date: date
    next_expected_date: date
    amounts: list[float] = Field(
        default_factory=list,
        description="Occurrence amounts, oldest first"
    )
    price_change_percent: Optional[float] = Field(
        default=None,
        description="Change between the last two amounts, in percent"
    )

    @property
    def monthly_equivalent(self) -> float:
        return self.frequency.monthly_equivalent(self.avg_amount)

    @property
    def frequency_label(self) -> str:
        return self.frequency.label

    @property
    def has_price_change(self) -> bool:
        return self.price_change_percent is not None

    def is_due_soon(self, today: date, window_days: int = 7) -> bool:
        """
        Is the next occurrence within ``window_days`` from ``today``?

        ``today`` is always supplied by the caller; the engine never
        reads the clock.
        """
        if self.next_expected_date < today:
            return False
        return (self.next_expected_date - today).days <= window_days


class RecurringSummary(BaseModel):
    """All detected recurring charges with their combined cost."""
    model_config = ConfigDict(frozen=True)

    items: list[RecurringItem] = Field(default_factory=list)
    total_monthly: float = 0.0
    total_yearly: float = 0.0

    @property
    def count(self) -> int:
        return len(self.items)


# =============================================================================
# SAVINGS RATE
# =============================================================================

class MonthSummary(BaseModel):
    """Income, expenses and savings rate for one calendar month."""
    model_config = ConfigDict(frozen=True)

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month key, YYYY-MM"
    )
    label: str = Field(
        ...,
        description="Short display label, e.g. 'Jan 2026'"
    )
    income: float = Field(default=0.0, ge=0)
    expenses: float = Field(default=0.0, ge=0)
    savings_rate: float = Field(
        default=0.0,
        description="Percent of income saved; negative when overspending"
    )

    @property
    def net(self) -> float:
        return self.income - self.expenses


class SavingsOverview(BaseModel):
    """
    Savings view for the latest month of data.

    Rolling rates are computed on aggregated income and expenses,
    not by averaging monthly rates.
    """
    model_config = ConfigDict(frozen=True)

    months: list[MonthSummary]
    current: MonthSummary
    rolling_3: Optional[float] = None
    rolling_12: Optional[float] = None
    years_to_fi: Optional[float] = Field(
        default=None,
        description="Years to financial independence at the current rate"
    )
    trend: list[MonthSummary] = Field(default_factory=list)


# =============================================================================
# BUDGETS
# =============================================================================

class BudgetHealth(str, Enum):
    """Traffic-light state of a budget."""
    ON_TRACK = "on_track"  # below 75%
    WARNING = "warning"    # 75% to 100%
    OVER = "over"          # above 100%


class BudgetStatus(BaseModel):
    """How much of a category budget has been used in a month."""
    model_config = ConfigDict(frozen=True)

    category: str
    spent: float = Field(default=0.0, ge=0)
    limit: float = Field(..., ge=0)
    percent_used: float = Field(
        default=0.0,
        ge=0,
        description="Uncapped; can exceed 100"
    )

    @property
    def health(self) -> BudgetHealth:
        if self.percent_used > 100:
            return BudgetHealth.OVER
        if self.percent_used >= 75:
            return BudgetHealth.WARNING
        return BudgetHealth.ON_TRACK

    @property
    def display_percent(self) -> float:
        """Percentage clamped to 100 for progress bars."""
        return min(self.percent_used, 100.0)

    @property
    def percent_over(self) -> int:
        if self.percent_used <= 100:
            return 0
        return round(self.percent_used - 100)

    @property
    def remaining(self) -> float:
        return self.limit - self.spent


# =============================================================================
# MONTH OVERVIEW
# =============================================================================

class CategoryTotal(BaseModel):
    """Total spent in one category."""
    model_config = ConfigDict(frozen=True)

    category: str
    amount: float = Field(..., ge=0)
    share_percent: float = Field(
        default=0.0,
        description="Share of the month's total, whole percent"
    )


class TrendPoint(BaseModel):
    """Income versus expenses for one month of a trend window."""
    model_config = ConfigDict(frozen=True)

    month: str
    label: str
    income: float = 0.0
    expenses: float = 0.0


class MemberBreakdown(BaseModel):
    """What one member paid in a month."""
    model_config = ConfigDict(frozen=True)

    member_id: str
    display_name: str
    shared_paid: float = 0.0
    personal_total: float = 0.0
    personal_categories: list[CategoryTotal] = Field(default_factory=list)


class MonthOverview(BaseModel):
    """
    Headline numbers for the selected month.

    ``balance_owed`` is positive when the second member owes the first,
    negative when the first owes the second. It is only set for
    two-member households.
    """
    model_config = ConfigDict(frozen=True)

    month: str
    total_income: float = 0.0
    total_spending: float = 0.0
    net_balance: float = 0.0
    shared_total: float = 0.0
    personal_total: float = 0.0
    members: list[MemberBreakdown] = Field(default_factory=list)
    balance_owed: Optional[float] = None
    settlement: Optional[str] = None
    categories: list[CategoryTotal] = Field(default_factory=list)
    trend: list[TrendPoint] = Field(default_factory=list)
    top_expenses: list[Transaction] = Field(default_factory=list)

    @property
    def is_settled(self) -> bool:
        return self.balance_owed is not None and abs(self.balance_owed) < 0.005
