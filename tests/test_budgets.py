"""
Tests for budget progress.
"""

from datetime import date
from decimal import Decimal

import pytest

from household_ledger.analytics.budgets import compute_budget_status, spending_by_category
from household_ledger.analytics.utils import InvalidMonthError
from household_ledger.models.analytics import BudgetHealth, BudgetStatus
from household_ledger.models.transaction import Budget


@pytest.fixture
def january(txn):
    return [
        txn("2026-01-03", "100.00", description="Supermarket", category="groceries"),
        txn("2026-01-17", "50.00", description="Market", category="groceries"),
        txn("2026-01-20", "30.00", description="Cinema", category="entertainment"),
        txn("2026-01-25", "500.00", description="Refund", category="groceries", is_income=True),
        txn("2026-02-01", "999.00", description="Supermarket", category="groceries"),
    ]


class TestBudgetStatus:
    """Tests for compute_budget_status."""

    def test_overspent_is_not_capped(self, january):
        budgets = [Budget(category="groceries", amount_limit=Decimal("100"))]
        status = compute_budget_status(january, budgets, "2026-01")

        assert len(status) == 1
        assert status[0].spent == pytest.approx(150.0)
        assert status[0].limit == 100.0
        assert status[0].percent_used == pytest.approx(150.0)

    def test_budget_without_spending(self, january):
        budgets = [Budget(category="transport", amount_limit=Decimal("80"))]
        status = compute_budget_status(january, budgets, "2026-01")

        assert status[0].spent == 0.0
        assert status[0].percent_used == 0.0

    def test_zero_limit(self, january):
        budgets = [Budget(category="groceries", amount_limit=Decimal("0"))]
        assert compute_budget_status(january, budgets, "2026-01")[0].percent_used == 0.0

    def test_budget_order_and_unbudgeted_categories(self, january):
        budgets = [
            Budget(category="entertainment", amount_limit=Decimal("60")),
            Budget(category="groceries", amount_limit=Decimal("300")),
        ]
        status = compute_budget_status(january, budgets, "2026-01")

        assert [s.category for s in status] == ["entertainment", "groceries"]
        assert status[0].percent_used == pytest.approx(50.0)
        assert status[1].percent_used == pytest.approx(50.0)

    def test_month_as_date(self, january):
        budgets = [Budget(category="groceries", amount_limit=Decimal("1000"))]
        status = compute_budget_status(january, budgets, date(2026, 2, 14))
        assert status[0].spent == pytest.approx(999.0)

    def test_invalid_month(self, january):
        with pytest.raises(InvalidMonthError):
            compute_budget_status(january, [], "January")

    def test_no_budgets(self, january):
        assert compute_budget_status(january, [], "2026-01") == []

    def test_idempotent(self, january):
        budgets = [Budget(category="groceries", amount_limit=Decimal("120"))]
        first = compute_budget_status(january, budgets, "2026-01")
        assert first == compute_budget_status(january, budgets, "2026-01")

    def test_spending_by_category_excludes_income(self, january):
        totals = spending_by_category(january, "2026-01")
        assert totals == pytest.approx({"groceries": 150.0, "entertainment": 30.0})


class TestBudgetHealth:
    """Tests for BudgetStatus display helpers."""

    @pytest.mark.parametrize("percent, expected", [
        (0, BudgetHealth.ON_TRACK),
        (74.9, BudgetHealth.ON_TRACK),
        (75, BudgetHealth.WARNING),
        (100, BudgetHealth.WARNING),
        (100.1, BudgetHealth.OVER),
    ])
    def test_health_thresholds(self, percent, expected):
        status = BudgetStatus(category="x", spent=percent, limit=100, percent_used=percent)
        assert status.health == expected

    def test_display_helpers(self):
        status = BudgetStatus(category="groceries", spent=150, limit=100, percent_used=150)

        assert status.display_percent == 100.0
        assert status.percent_over == 50
        assert status.remaining == -50

    def test_not_over(self):
        status = BudgetStatus(category="groceries", spent=40, limit=100, percent_used=40)

        assert status.percent_over == 0
        assert status.display_percent == 40
