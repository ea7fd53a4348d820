"""Discretionary category allowances used by the daily spending limit.

This table is separate from the persisted budget_categories table on purpose:
the persisted table is monthly and covers fixed costs, while this one covers
only day-to-day discretionary spending and is budgeted per half-month pay
period.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class CategoryAllowance:
    """Monthly and per-pay-period allowance for one discretionary category."""

    monthly: Decimal
    semi_monthly: Decimal

    @classmethod
    def from_monthly(
        cls, monthly: str, semi_monthly: Optional[str] = None
    ) -> "CategoryAllowance":
        """Build an allowance; the half-month amount defaults to monthly / 2."""
        monthly_amount = Decimal(monthly)
        if semi_monthly is None:
            return cls(monthly=monthly_amount, semi_monthly=monthly_amount / 2)
        return cls(monthly=monthly_amount, semi_monthly=Decimal(semi_monthly))


DISCRETIONARY_CATEGORIES: Dict[str, CategoryAllowance] = {
    "Groceries": CategoryAllowance.from_monthly("350"),
    "Delivery": CategoryAllowance.from_monthly("200"),
    "Transportation": CategoryAllowance.from_monthly("375"),
    "Restaurants": CategoryAllowance.from_monthly("300"),
    "Entertainment": CategoryAllowance.from_monthly("150"),
    "Bars & Nightlife": CategoryAllowance.from_monthly("150"),
    "Shops": CategoryAllowance.from_monthly("150"),
    "Other": CategoryAllowance.from_monthly("100"),
    "Healthcare": CategoryAllowance.from_monthly("200"),
    "Pets": CategoryAllowance.from_monthly("275"),
}

# Categories whose overspend alone is enough to downgrade the status
PROBLEM_CATEGORIES = ("Delivery",)


def total_semi_monthly(
    table: Mapping[str, CategoryAllowance] = DISCRETIONARY_CATEGORIES,
) -> Decimal:
    """Total discretionary allowance for one pay period ($1,125 for the default table)."""
    return sum((allowance.semi_monthly for allowance in table.values()), Decimal("0"))


def total_monthly(
    table: Mapping[str, CategoryAllowance] = DISCRETIONARY_CATEGORIES,
) -> Decimal:
    return sum((allowance.monthly for allowance in table.values()), Decimal("0"))
