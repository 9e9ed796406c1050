"""Decimal helpers for monetary amounts"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

AmountLike = Union[Decimal, int, float, str]


def parse_amount(value: AmountLike) -> Optional[Decimal]:
    """
    Convert user input to Decimal. Returns None for anything that is not a
    finite number (empty strings, "abc", NaN, infinity).

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def round_whole(value: Decimal) -> Decimal:
    """Round half-up to a whole currency unit"""
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def format_amount(value: Decimal, currency: str) -> str:
    """20000 -> "20,000 EGP" """
    return f"{value:,} {currency}"
