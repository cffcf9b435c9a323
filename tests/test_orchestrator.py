"""
Tests for the dashboard flow, input loading and audit logging.
"""

from datetime import date

import pytest

from household_ledger.analytics.recurring import detect_recurring
from household_ledger.analytics.utils import InvalidMonthError
from household_ledger.audit import AuditLogger, create_correlation_id
from household_ledger.config import AnalyticsSettings
from household_ledger.models.audit import AuditEventType
from household_ledger.orchestrator import DashboardFlow, create_dashboard_flow
from household_ledger.validation import load_budgets, load_members, load_transactions


def raw_rows():
    """Rows as the storage layer would hand them over."""
    rows = []
    for i, month in enumerate(["2025-11", "2025-12", "2026-01"]):
        rows.append({
            "id": f"salary-{i}", "date": f"{month}-01", "description": "Salary",
            "amount": "2000.00", "category": "salary", "is_income": True, "paid_by": "alice",
        })
        rows.append({
            "id": f"rent-{i}", "date": f"{month}-03", "description": "Rent",
            "amount": "900.00", "category": "rent", "expense_type": "shared",
            "payment_method": "bank_transfer", "paid_by": "alice",
        })
        rows.append({
            "id": f"netflix-{i}", "date": f"{month}-20", "description": "Netflix",
            "amount": "12.99", "category": "subscriptions", "expense_type": "shared",
            "payment_method": "credit_card", "paid_by": "bob",
        })
    return rows


BUDGETS = [
    {"category": "rent", "amount_limit": "800"},
    {"category": "groceries", "amount_limit": "400"},
]

MEMBERS = [
    {"id": "alice", "display_name": "Alice"},
    {"id": "bob", "display_name": "Bob"},
]


@pytest.fixture
def flow():
    return DashboardFlow(
        settings=AnalyticsSettings(due_soon_days=7, top_expenses_limit=10, trend_months=6),
        audit_logger=AuditLogger(keep_history=True),
    )


class TestLoading:
    """Tests for load_transactions and load_budgets."""

    def test_bad_rows_are_dropped(self):
        rows = raw_rows() + [
            {"id": "broken-date", "date": "not-a-date", "amount": "5"},
            {"id": "negative", "date": "2026-01-05", "amount": "-5"},
        ]
        logger = AuditLogger(keep_history=True)
        result = load_transactions(rows, audit_logger=logger)

        assert len(result.accepted) == 9
        assert [r.record_id for r in result.rejected] == ["broken-date", "negative"]
        assert result.rejected[0].index == 9
        assert result.rejected[0].errors[0]["field"] == "date"

        event_types = [e.event_type for e in logger.history]
        assert event_types.count(AuditEventType.RECORD_REJECTED) == 2
        assert event_types[-1] == AuditEventType.TRANSACTIONS_LOADED

    def test_numeric_description_is_kept(self):
        rows = [
            {"id": 1, "date": "2026-01-01", "description": 123, "amount": 5},
            {"id": 2, "date": "2026-01-31", "description": 123, "amount": 5},
        ]
        result = load_transactions(rows)

        assert result.rejected == []
        assert [i.group_key for i in detect_recurring(result.accepted)] == ["123"]

    def test_models_pass_through(self):
        first = load_transactions(raw_rows()).accepted
        again = load_transactions(first).accepted
        assert again == first

    def test_load_budgets(self):
        result = load_budgets(BUDGETS + [{"category": "", "amount_limit": "10"}])

        assert [b.category for b in result.accepted] == ["rent", "groceries"]
        assert result.rejected_count == 1

    def test_load_members(self):
        result = load_members(MEMBERS + [{"id": "carol", "display_name": ""}])

        assert [m.id for m in result.accepted] == ["alice", "bob"]
        assert result.rejected[0].record_id == "carol"


class TestDashboardFlow:
    """Tests for DashboardFlow.build."""

    def test_build(self, flow):
        dashboard = flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 15))

        assert dashboard.month == "2026-01"
        assert [i.group_key for i in dashboard.recurring.items] == ["rent", "netflix"]
        assert dashboard.savings.current.month == "2026-01"
        assert dashboard.savings.rolling_3 == pytest.approx(54.4)
        assert [b.category for b in dashboard.over_budget] == ["rent"]
        assert dashboard.overview.settlement == "Bob owes Alice €887.01"
        assert dashboard.rejected == []

    def test_upcoming_depends_on_today(self, flow):
        # Rent was last paid 2026-01-03, next expected 2026-02-02
        early = flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 10))
        late = flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 28))

        assert early.upcoming == []
        assert [i.group_key for i in late.upcoming] == ["rent"]

    def test_rejected_rows_are_reported(self, flow):
        rows = raw_rows() + [{"id": "bad", "date": None}]
        dashboard = flow.build(rows, BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 15))

        assert [r.record_id for r in dashboard.rejected] == ["bad"]

    def test_no_income_logs_insufficient_data(self, flow):
        rows = [r for r in raw_rows() if r["description"] != "Salary"]
        dashboard = flow.build(rows, [], MEMBERS, "2026-01", today=date(2026, 1, 15))

        assert dashboard.savings is None
        assert not dashboard.has_savings_data
        event_types = [e.event_type for e in flow._audit_logger.history]
        assert AuditEventType.INSUFFICIENT_DATA in event_types

    def test_events_share_correlation_id(self, flow):
        correlation_id = create_correlation_id()
        flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 15),
                   correlation_id=correlation_id)

        history = flow._audit_logger.history
        assert history[-1].event_type == AuditEventType.DASHBOARD_BUILT
        assert all(e.correlation_id == correlation_id for e in history)

    def test_invalid_month(self, flow):
        with pytest.raises(InvalidMonthError):
            flow.build(raw_rows(), BUDGETS, MEMBERS, "2026/01", today=date(2026, 1, 15))

    def test_deterministic(self, flow):
        first = flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 15))
        second = flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 15))
        assert first == second

    def test_factory(self):
        flow = create_dashboard_flow(keep_history=True)
        flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 15))

        assert flow._audit_logger.history[-1].event_type == AuditEventType.DASHBOARD_BUILT

    def test_without_audit_logger(self):
        flow = DashboardFlow(settings=AnalyticsSettings())
        dashboard = flow.build(raw_rows(), BUDGETS, MEMBERS, "2026-01", today=date(2026, 1, 15))
        assert dashboard.recurring.count == 2
