"""
Data Models Package

This package contains all Pydantic models used in Household Ledger.
Input models describe what the storage layer supplies; analytics
models describe the views the engine produces.
"""

from household_ledger.models.transaction import (
    DEFAULT_CATEGORIES,
    PAYMENT_METHOD_LABELS,
    Budget,
    ExpenseType,
    HouseholdMember,
    PaymentMethod,
    Transaction,
)
from household_ledger.models.analytics import (
    BudgetHealth,
    BudgetStatus,
    CategoryTotal,
    Frequency,
    MemberBreakdown,
    MonthOverview,
    MonthSummary,
    RecurringItem,
    RecurringSummary,
    SavingsOverview,
    TrendPoint,
)
from household_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Input models
    "DEFAULT_CATEGORIES",
    "PAYMENT_METHOD_LABELS",
    "Budget",
    "ExpenseType",
    "HouseholdMember",
    "PaymentMethod",
    "Transaction",
    # Derived models
    "BudgetHealth",
    "BudgetStatus",
    "CategoryTotal",
    "Frequency",
    "MemberBreakdown",
    "MonthOverview",
    "MonthSummary",
    "RecurringItem",
    "RecurringSummary",
    "SavingsOverview",
    "TrendPoint",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
