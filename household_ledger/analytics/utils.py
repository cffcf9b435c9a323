"""
Money and Date Helpers

Small building blocks shared by the analytics modules.

Rounding follows the dashboard convention: half-up to one decimal
(``floor(x * 10 + 0.5) / 10``), not Python's banker's rounding.
"""

import math
import re
from datetime import date, timedelta
from typing import Sequence, Union

from household_ledger.models.transaction import PAYMENT_METHOD_LABELS, PaymentMethod


MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

MonthLike = Union[str, date]


class InvalidMonthError(ValueError):
    """A month argument was not a YYYY-MM string or a date."""
    pass


# =============================================================================
# DATES
# =============================================================================

def days_between(a: date, b: date) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((b - a).days)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def month_key(d: date) -> str:
    """Bucket key for the month containing ``d``."""
    return d.strftime("%Y-%m")


def parse_month(month: MonthLike) -> tuple[int, int]:
    """
    Split a month argument into (year, month).

    Accepts "YYYY-MM" or any date inside the month.

    Raises:
        InvalidMonthError: If the value is not a valid month.
    """
    if isinstance(month, date):
        return month.year, month.month

    match = MONTH_PATTERN.match(str(month).strip())
    if not match:
        raise InvalidMonthError(f"Expected a month as YYYY-MM, got {month!r}")

    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12:
        raise InvalidMonthError(f"Month out of range in {month!r}")
    return year, month_number


def normalize_month(month: MonthLike) -> str:
    year, month_number = parse_month(month)
    return f"{year:04d}-{month_number:02d}"


def shift_month(month: MonthLike, offset: int) -> str:
    """Move a month key ``offset`` calendar months (negative goes back)."""
    year, month_number = parse_month(month)
    index = year * 12 + (month_number - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def month_label(month: MonthLike) -> str:
    """'2026-01' -> 'Jan 2026'."""
    year, month_number = parse_month(month)
    return date(year, month_number, 1).strftime("%b %Y")


# =============================================================================
# STATISTICS
# =============================================================================

def median(values: Sequence[float]) -> float:
    """
    Middle value of the sorted input.

    Even-length input averages the two middle values.
    Empty input has no median.
    """
    if not values:
        raise ValueError("median() of an empty sequence")
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def mean(values: Sequence[float]) -> float:
    if not values:
        raise ValueError("mean() of an empty sequence")
    return sum(values) / len(values)


def population_std_dev(values: Sequence[float]) -> float:
    """Standard deviation dividing by N (not N - 1)."""
    avg = mean(values)
    variance = sum((v - avg) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


# =============================================================================
# MONEY
# =============================================================================

def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with halves going up."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percent_of(part: float, whole: float, digits: int = 1) -> float:
    """``part / whole`` as a rounded percentage; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0.0
    return math.floor(part / whole * (100 * 10 ** digits) + 0.5) / 10 ** digits


def format_money(amount: float, symbol: str = "€") -> str:
    """12.5 -> '€12.50'."""
    return f"{symbol}{amount:,.2f}"


def format_category(category: str) -> str:
    """'home_goods' -> 'Home Goods'."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), category.replace("_", " "))


def format_payment_method(method: Union[str, PaymentMethod]) -> str:
    """Display label for a payment method; unknown values pass through."""
    try:
        return PAYMENT_METHOD_LABELS[PaymentMethod(method)]
    except ValueError:
        return str(method)
