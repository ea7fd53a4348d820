"""Household profile model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class UserProfile:
    """The single household this installation budgets for.

    Attributes:
        name: Name the advisor addresses.
        net_monthly_income: Take-home pay per month.
        pay_schedule: Free-form label; pay days are the 15th and the last day.
        onboarding_complete: Set once the onboarding flow has finished.
        last_balance_update: When balances were last entered.
        last_transaction_import: When a CSV was last imported.
    """

    name: str = "User"
    net_monthly_income: Decimal = Decimal("0.00")
    pay_schedule: str = "semi-monthly-15-last"
    onboarding_complete: bool = False
    last_balance_update: Optional[datetime] = None
    last_transaction_import: Optional[datetime] = None
