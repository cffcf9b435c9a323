"""Shared fixtures for Household Ledger tests."""

from datetime import date
from decimal import Decimal
from itertools import count

import pytest

from household_ledger.models.transaction import Transaction


_ids = count(1)


def make_txn(
    when: str,
    amount: str = "10.00",
    description: str = "Netflix",
    category: str = "subscriptions",
    is_income: bool = False,
    expense_type: str = "personal",
    paid_by: str = "alice",
) -> Transaction:
    """Build a Transaction with sensible defaults."""
    return Transaction(
        id=f"t{next(_ids)}",
        date=date.fromisoformat(when),
        description=description,
        amount=Decimal(amount),
        category=category,
        is_income=is_income,
        expense_type=expense_type,
        paid_by=paid_by,
    )


@pytest.fixture
def txn():
    """Factory fixture for transactions."""
    return make_txn
