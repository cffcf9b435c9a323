"""
Input Models for Household Ledger

These models describe what the storage layer hands to the engine:
transactions, budgets and household members.

DESIGN DECISION: Coercion is lenient, validation is not.
Rows coming from the database or a CSV import are often sloppy
(amounts as strings, odd casing, missing descriptions). Those are
normalized to sane defaults. Rows that cannot mean anything
(no valid date, negative amount) still fail loudly.

All input models are frozen - the engine never mutates a snapshot.
"""

from datetime import date as date_type, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseType(str, Enum):
    """
    Who an expense belongs to.

    Meaningless for income transactions.
    """
    SHARED = "shared"      # Split across the household
    PERSONAL = "personal"  # Belongs to whoever paid


class PaymentMethod(str, Enum):
    """Supported payment methods."""
    CASH = "cash"
    DEBIT_CARD = "debit_card"
    CREDIT_CARD = "credit_card"
    BIZUM = "bizum"
    BANK_TRANSFER = "bank_transfer"
    REVOLUT = "revolut"
    OTHER = "other"


PAYMENT_METHOD_LABELS: dict[PaymentMethod, str] = {
    PaymentMethod.CASH: "Cash",
    PaymentMethod.DEBIT_CARD: "Debit Card",
    PaymentMethod.CREDIT_CARD: "Credit Card",
    PaymentMethod.BIZUM: "Bizum",
    PaymentMethod.BANK_TRANSFER: "Bank Transfer",
    PaymentMethod.REVOLUT: "Revolut",
    PaymentMethod.OTHER: "Other",
}

DEFAULT_CATEGORIES = [
    "takeout", "restaurants", "coffee", "transport", "rent", "groceries",
    "clothing", "beauty", "gifts", "subscriptions", "entertainment",
    "electronics", "home_goods", "utilities", "other",
]


def _coerce_amount(v: Any) -> Any:
    """Missing or unparseable amounts become zero."""
    if v is None:
        return Decimal("0")
    if isinstance(v, str):
        try:
            return Decimal(v.strip())
        except InvalidOperation:
            return Decimal("0")
    return v


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    The sign of a transaction lives in ``is_income``; ``amount`` is
    always non-negative.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Opaque unique identifier"
    )
    date: date_type = Field(
        ...,
        description="Calendar date of the transaction (no time of day)"
    )
    description: str = Field(
        default="",
        description="Free text, kept verbatim for display"
    )
    amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Non-negative amount"
    )
    category: str = Field(
        default="other",
        description="Category slug (snake_case by convention)"
    )
    expense_type: ExpenseType = Field(
        default=ExpenseType.PERSONAL,
        description="Shared or personal expense"
    )
    payment_method: PaymentMethod = Field(
        default=PaymentMethod.OTHER,
        description="How it was paid"
    )
    is_income: bool = Field(
        default=False,
        description="True for income, False for expenses"
    )
    paid_by: Optional[str] = Field(
        default=None,
        description="Household member id of the payer"
    )
    notes: str = ""
    source: str = ""

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Database ids may arrive as UUIDs or integers."""
        return str(v) if v is not None else v

    @field_validator('date', mode='before')
    @classmethod
    def truncate_timestamp(cls, v: Any) -> Any:
        """Accept timestamps by keeping only the YYYY-MM-DD part."""
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str):
            return v.strip()[:10]
        return v

    @field_validator('description', 'notes', 'source', mode='before')
    @classmethod
    def default_text(cls, v: Any) -> Any:
        """Spreadsheet imports hand over numbers where text is expected."""
        return "" if v is None else str(v)

    @field_validator('amount', mode='before')
    @classmethod
    def default_amount(cls, v: Any) -> Any:
        return _coerce_amount(v)

    @field_validator('category', mode='before')
    @classmethod
    def default_category(cls, v: Any) -> Any:
        if v is None or not str(v).strip():
            return "other"
        return str(v)

    @field_validator('expense_type', mode='before')
    @classmethod
    def normalize_expense_type(cls, v: Any) -> ExpenseType:
        """Anything that is not 'shared' counts as personal."""
        if isinstance(v, ExpenseType):
            return v
        if str(v).strip().lower() == ExpenseType.SHARED.value:
            return ExpenseType.SHARED
        return ExpenseType.PERSONAL

    @field_validator('payment_method', mode='before')
    @classmethod
    def normalize_payment_method(cls, v: Any) -> PaymentMethod:
        """Unknown payment methods fall back to OTHER."""
        if isinstance(v, PaymentMethod):
            return v
        try:
            return PaymentMethod(str(v).strip().lower())
        except ValueError:
            return PaymentMethod.OTHER

    @field_validator('is_income', mode='before')
    @classmethod
    def coerce_is_income(cls, v: Any) -> bool:
        return bool(v)

    @field_validator('paid_by', mode='before')
    @classmethod
    def coerce_paid_by(cls, v: Any) -> Any:
        return str(v) if v is not None else None

    @property
    def month(self) -> str:
        """Month bucket key, YYYY-MM."""
        return self.date.strftime("%Y-%m")

    @property
    def is_expense(self) -> bool:
        return not self.is_income


# =============================================================================
# BUDGET & MEMBERS
# =============================================================================

class Budget(BaseModel):
    """
    Monthly spending limit for one category.

    One budget per category per household.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    category: str = Field(
        ...,
        min_length=1,
        description="Category slug this limit applies to"
    )
    amount_limit: Decimal = Field(
        ...,
        ge=0,
        description="Monthly limit"
    )

    @field_validator('amount_limit', mode='before')
    @classmethod
    def default_limit(cls, v: Any) -> Any:
        return _coerce_amount(v)


class HouseholdMember(BaseModel):
    """A member of the household, referenced by ``Transaction.paid_by``."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str
    display_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
    )

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return str(v) if v is not None else v
