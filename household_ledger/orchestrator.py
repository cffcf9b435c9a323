"""
Main Orchestrator for Household Ledger

This module ties together loading, analytics and auditing into the
single flow behind the dashboard:

    raw rows → load & validate → analyze → Dashboard

DESIGN DECISION: The orchestrator enforces the boundaries:
- "Today" always comes from the caller, never from the clock
- Rejected rows are logged, never silently repaired
- Each view is computed independently from the same snapshot
- Every build is audited under one correlation ID
"""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from household_ledger.analytics import (
    compute_budget_status,
    compute_month_overview,
    compute_savings_overview,
    summarize_recurring,
    upcoming_recurring,
)
from household_ledger.analytics.utils import MonthLike, normalize_month
from household_ledger.audit import AuditLogger, configure_logging, create_correlation_id
from household_ledger.config import AnalyticsSettings, get_settings
from household_ledger.models.analytics import (
    BudgetHealth,
    BudgetStatus,
    MonthOverview,
    RecurringItem,
    RecurringSummary,
    SavingsOverview,
)
from household_ledger.models.transaction import Budget, HouseholdMember, Transaction
from household_ledger.validation import (
    RejectedRecord,
    load_budgets,
    load_members,
    load_transactions,
)
from household_ledger.validation.loader import RecordLike


class Dashboard(BaseModel):
    """Every view the dashboard renders for one month."""
    model_config = ConfigDict(frozen=True)

    month: str
    today: date
    recurring: RecurringSummary
    upcoming: list[RecurringItem] = Field(default_factory=list)
    savings: Optional[SavingsOverview] = None
    budgets: list[BudgetStatus] = Field(default_factory=list)
    overview: MonthOverview
    rejected: list[RejectedRecord] = Field(default_factory=list)

    @property
    def over_budget(self) -> list[BudgetStatus]:
        return [b for b in self.budgets if b.health == BudgetHealth.OVER]

    @property
    def has_savings_data(self) -> bool:
        return self.savings is not None


class DashboardFlow:
    """
    Orchestrates a dashboard build.

    Flow:
    1. Load → Coerce transactions, budgets and members; drop bad rows
    2. Recurring → Detect subscriptions and what is due soon
    3. Savings → Monthly savings rate, rolling rates, FI years
    4. Budgets → Progress per budgeted category for the month
    5. Overview → Totals, member split, breakdowns for the month
    """

    def __init__(
        self,
        settings: Optional[AnalyticsSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings().analytics
        self._audit_logger = audit_logger

    def build(
        self,
        transactions: Iterable[RecordLike],
        budgets: Iterable[RecordLike],
        members: Iterable[RecordLike],
        selected_month: MonthLike,
        today: date,
        correlation_id: Optional[UUID] = None,
    ) -> Dashboard:
        """
        Build every dashboard view from raw rows.

        Raises:
            InvalidMonthError: If ``selected_month`` is not a valid month.
        """
        correlation_id = correlation_id or create_correlation_id()
        month = normalize_month(selected_month)

        loaded_transactions = load_transactions(transactions, self._audit_logger, correlation_id)
        loaded_budgets = load_budgets(budgets, self._audit_logger, correlation_id)
        loaded_members = load_members(members, self._audit_logger, correlation_id)

        try:
            dashboard = self.analyze(
                loaded_transactions.accepted,
                loaded_budgets.accepted,
                loaded_members.accepted,
                month,
                today,
                correlation_id=correlation_id,
            )
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"month": month},
                    correlation_id=correlation_id,
                )
            raise

        rejected = (
            loaded_transactions.rejected
            + loaded_budgets.rejected
            + loaded_members.rejected
        )
        return dashboard.model_copy(update={"rejected": rejected})

    def analyze(
        self,
        transactions: Sequence[Transaction],
        budgets: Sequence[Budget],
        members: Sequence[HouseholdMember],
        selected_month: MonthLike,
        today: date,
        correlation_id: Optional[UUID] = None,
    ) -> Dashboard:
        """Build every dashboard view from already-validated models."""
        month = normalize_month(selected_month)

        recurring = summarize_recurring(transactions)
        upcoming = upcoming_recurring(recurring.items, today, self._settings.due_soon_days)

        savings = compute_savings_overview(transactions, self._settings.savings_trend_months)
        budget_status = compute_budget_status(transactions, budgets, month)
        overview = compute_month_overview(
            transactions,
            members,
            month,
            trend_months=self._settings.trend_months,
            top_limit=self._settings.top_expenses_limit,
            currency_symbol=self._settings.currency_symbol,
        )

        dashboard = Dashboard(
            month=month,
            today=today,
            recurring=recurring,
            upcoming=upcoming,
            savings=savings,
            budgets=budget_status,
            overview=overview,
        )

        if self._audit_logger:
            self._audit(dashboard, len(transactions), correlation_id)

        return dashboard

    def _audit(
        self,
        dashboard: Dashboard,
        transaction_count: int,
        correlation_id: Optional[UUID],
    ) -> None:
        logger = self._audit_logger

        logger.log_recurring_detected(
            count=dashboard.recurring.count,
            total_monthly=dashboard.recurring.total_monthly,
            correlation_id=correlation_id,
        )

        if dashboard.savings is None:
            logger.log_insufficient_data(
                view="savings",
                reason="no income recorded",
                correlation_id=correlation_id,
            )
        else:
            logger.log_savings_computed(
                month=dashboard.savings.current.month,
                savings_rate=dashboard.savings.current.savings_rate,
                years_to_fi=dashboard.savings.years_to_fi,
                correlation_id=correlation_id,
            )

        logger.log_budget_status(
            month=dashboard.month,
            budget_count=len(dashboard.budgets),
            over_budget=[b.category for b in dashboard.over_budget],
            correlation_id=correlation_id,
        )

        logger.log_dashboard_built(
            month=dashboard.month,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        )


def create_dashboard_flow(keep_history: bool = False) -> DashboardFlow:
    """
    Factory function to create a DashboardFlow from settings.

    Args:
        keep_history: Keep audit events on the logger for inspection.
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)
    return DashboardFlow(
        settings=settings.analytics,
        audit_logger=AuditLogger(keep_history=keep_history),
    )
