"""
Tests for Household Ledger

Test strategy:
1. Unit tests for models, helpers and each analytics module
2. Flow tests for the dashboard orchestrator
3. No storage, network or clock access in tests
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from household_ledger.models.analytics import Frequency, RecurringItem
from household_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from household_ledger.models.transaction import (
    DEFAULT_CATEGORIES,
    Budget,
    ExpenseType,
    HouseholdMember,
    PaymentMethod,
    Transaction,
)


class TestTransactionModel:
    """Tests for Transaction coercion and validation."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        txn = Transaction(
            id="t1",
            date="2026-01-15",
            description="Mercadona",
            amount="42.10",
            category="groceries",
            expense_type="shared",
            payment_method="debit_card",
            is_income=False,
            paid_by="alice",
        )
        assert txn.date == date(2026, 1, 15)
        assert txn.amount == Decimal("42.10")
        assert txn.expense_type == ExpenseType.SHARED
        assert txn.payment_method == PaymentMethod.DEBIT_CARD
        assert txn.month == "2026-01"
        assert txn.is_expense

    def test_description_kept_verbatim(self):
        txn = Transaction(id="t1", date="2026-01-15", description="  Netflix ")
        assert txn.description == "  Netflix "

    def test_missing_fields_are_defaulted(self):
        txn = Transaction(id="t1", date="2026-01-15", description=None, amount=None)
        assert txn.description == ""
        assert txn.amount == Decimal("0")
        assert txn.category == "other"
        assert txn.expense_type == ExpenseType.PERSONAL
        assert txn.payment_method == PaymentMethod.OTHER
        assert txn.is_income is False
        assert txn.paid_by is None

    def test_unparseable_amount_becomes_zero(self):
        txn = Transaction(id="t1", date="2026-01-15", amount="abc")
        assert txn.amount == Decimal("0")

    def test_timestamp_is_truncated(self):
        txn = Transaction(id="t1", date="2026-01-15T23:30:00Z")
        assert txn.date == date(2026, 1, 15)

    def test_expense_type_normalization(self):
        assert Transaction(id="t1", date="2026-01-15", expense_type="SHARED").expense_type == ExpenseType.SHARED
        assert Transaction(id="t2", date="2026-01-15", expense_type="joint").expense_type == ExpenseType.PERSONAL

    def test_unknown_payment_method_falls_back(self):
        assert Transaction(id="t1", date="2026-01-15", payment_method="Revolut").payment_method == PaymentMethod.REVOLUT
        assert Transaction(id="t2", date="2026-01-15", payment_method="paypal").payment_method == PaymentMethod.OTHER

    def test_numeric_text_is_stringified(self):
        txn = Transaction(id="t1", date="2026-01-15", description=123, category=7, notes=4.5)
        assert txn.description == "123"
        assert txn.category == "7"
        assert txn.notes == "4.5"

    def test_notes_and_source_are_carried(self):
        txn = Transaction(id="t1", date="2026-01-15", notes="split with Bob", source=None)
        assert txn.notes == "split with Bob"
        assert txn.source == ""

    def test_default_category_is_known(self):
        assert Transaction(id="t1", date="2026-01-15").category in DEFAULT_CATEGORIES
        assert DEFAULT_CATEGORIES[-1] == "other"

    def test_ids_are_strings(self):
        txn = Transaction(id=42, date="2026-01-15", paid_by=7)
        assert txn.id == "42"
        assert txn.paid_by == "7"

    def test_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            Transaction(id="t1", date="2026-01-15", amount=Decimal("-5"))

    def test_rejects_invalid_date(self):
        with pytest.raises(ValidationError):
            Transaction(id="t1", date="2026-02-30")

    def test_is_immutable(self):
        txn = Transaction(id="t1", date="2026-01-15", amount="10")
        with pytest.raises(ValidationError):
            txn.amount = Decimal("20")


class TestBudgetAndMemberModels:
    """Tests for Budget and HouseholdMember."""

    def test_budget_creation(self):
        budget = Budget(category=" groceries ", amount_limit="300")
        assert budget.category == "groceries"
        assert budget.amount_limit == Decimal("300")

    def test_budget_rejects_negative_limit(self):
        with pytest.raises(ValidationError):
            Budget(category="groceries", amount_limit=Decimal("-1"))

    def test_budget_requires_category(self):
        with pytest.raises(ValidationError):
            Budget(category="", amount_limit=Decimal("10"))

    def test_member_creation(self):
        member = HouseholdMember(id=1, display_name="  Alice ")
        assert member.id == "1"
        assert member.display_name == "Alice"


class TestDerivedModels:
    """Tests for derived model helpers."""

    def test_frequency_properties(self):
        assert Frequency.WEEKLY.days == 7
        assert Frequency.BIWEEKLY.days == 14
        assert Frequency.MONTHLY.days == 30
        assert Frequency.QUARTERLY.days == 90
        assert Frequency.BIWEEKLY.label == "Every 2 weeks"

    def test_recurring_item_needs_two_occurrences(self):
        with pytest.raises(ValidationError):
            RecurringItem(
                group_key="gym",
                description="Gym",
                category="health",
                avg_amount=30.0,
                frequency=Frequency.MONTHLY,
                occurrences=1,
                last_date=date(2026, 1, 1),
                next_expected_date=date(2026, 1, 31),
            )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.DASHBOARD_BUILT,
            description="Dashboard built",
        )
        assert event.event_type == AuditEventType.DASHBOARD_BUILT
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.recurring_detected(count=3, total_monthly=84.456)
        log_dict = event.to_log_dict()

        assert "event_id" in log_dict
        assert log_dict["event_type"] == "recurring_detected"
        assert log_dict["details"]["total_monthly"] == 84.46

    def test_record_rejected_is_a_warning(self):
        event = AuditEventBuilder.record_rejected(
            entity_type="transaction",
            record_id="t9",
            errors=[{"field": "date", "issue_type": "date_from_datetime_parsing", "message": "bad"}],
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.entity_id == "t9"

    def test_transactions_loaded_severity(self):
        assert AuditEventBuilder.transactions_loaded(10, 0).severity == AuditSeverity.INFO
        assert AuditEventBuilder.transactions_loaded(10, 2).severity == AuditSeverity.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
