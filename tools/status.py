"""Daily spending limit and traffic-light status."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from models.money import round_whole
from tools.discretionary import PROBLEM_CATEGORIES
from tools.spending import CategorySpending

STOP_BELOW = 10
CAUTION_BELOW = 30

SAFE = "safe"
CAUTION = "caution"
STOP = "stop"


@dataclass(frozen=True)
class SpendingStatus:
    daily_limit: int
    status: str  # "safe", "caution" or "stop"

    @property
    def can_spend_today(self) -> bool:
        return self.status != STOP and self.daily_limit > 0


def daily_limit(discretionary_remaining: Decimal, days_remaining: int) -> int:
    """Whole dollars that can be spent per remaining day, never below zero.

    Raises:
        ValueError: If days_remaining is not positive.
    """
    if days_remaining < 1:
        raise ValueError(f"days_remaining must be at least 1, got {days_remaining}")
    return max(0, round_whole(Decimal(discretionary_remaining) / days_remaining))


def classify(
    discretionary_remaining: Decimal,
    days_remaining: int,
    category_breakdown: Iterable[CategorySpending],
    problem_categories: Sequence[str] = PROBLEM_CATEGORIES,
) -> SpendingStatus:
    """Derive the daily limit and status from pay-period totals."""
    limit = daily_limit(discretionary_remaining, days_remaining)
    problem_over = any(
        row.is_over for row in category_breakdown if row.category in problem_categories
    )

    if limit < STOP_BELOW or discretionary_remaining < 0:
        status = STOP
    elif limit < CAUTION_BELOW or problem_over:
        status = CAUTION
    else:
        status = SAFE

    return SpendingStatus(daily_limit=limit, status=status)
