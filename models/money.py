"""Helpers for two-decimal US dollar amounts."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    """Convert a stored or parsed number to a Decimal rounded to cents.

    Floats go through str() so 0.1 becomes Decimal("0.10"), not its binary
    expansion.
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_optional_money(value: Optional[Number]) -> Optional[Decimal]:
    """Like to_money, but passes None through (unknown balances, unset rates)."""
    if value is None:
        return None
    return to_money(value)


def round_whole(value: Decimal) -> int:
    """Round half-up to a whole number (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_money(text: str) -> Decimal:
    """Parse user input such as "1,234.50" or "$99".

    Raises:
        ValueError: If the text is not a finite number.
    """
    cleaned = str(text).strip().replace("$", "").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Not an amount: {text!r}")
    if not amount.is_finite():
        raise ValueError(f"Not an amount: {text!r}")
    return to_money(amount)
