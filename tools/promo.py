"""Promotional-rate payoff countdown.

Shared by the advisor briefing and the CLI dashboard.
"""

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from models.debt import Debt

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class PromoPayoff:
    """How a promotional balance is tracking against its deadline.

    Attributes:
        promo_end_date: Last day of the promotional rate.
        months_remaining: Whole months left, rounded up; 0 once the promo has ended.
        monthly_needed: Whole-dollar payment needed to clear the balance in time.
        on_track: Whether the current monthly payment covers monthly_needed.
    """

    promo_end_date: date
    months_remaining: int
    monthly_needed: int
    on_track: bool


def promo_payoff(debt: Debt, today: date) -> Optional[PromoPayoff]:
    """Compute the payoff countdown for a debt with a promotional window.

    Returns None for debts without a promo end date. An unknown balance needs
    nothing per month. Once fewer than one month remains (or the promo has
    ended) the whole balance is needed now.
    """
    if debt.promo_end_date is None:
        return None

    days_left = (debt.promo_end_date - today).days
    months_remaining = max(0, math.ceil(days_left / DAYS_PER_MONTH))

    balance = debt.current_balance or Decimal("0")
    if balance <= 0:
        monthly_needed = 0
    elif months_remaining < 1:
        monthly_needed = math.ceil(balance)
    else:
        monthly_needed = math.ceil(balance / months_remaining)

    return PromoPayoff(
        promo_end_date=debt.promo_end_date,
        months_remaining=months_remaining,
        monthly_needed=monthly_needed,
        on_track=debt.monthly_payment >= monthly_needed,
    )
