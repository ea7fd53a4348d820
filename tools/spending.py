"""Spending aggregation by category over a date window.

Sign convention: stored amounts are positive for money spent and negative for
refunds, income and transfers in. A transaction counts as spend when it is not
excluded, falls inside the window, and its amount is greater than zero.
Imports from banks that export expenses as negative numbers flip the sign at
import time, so the stored data always follows this convention.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping

from models.money import round_whole
from models.transaction import Transaction
from tools.discretionary import (
    DISCRETIONARY_CATEGORIES,
    CategoryAllowance,
    total_semi_monthly,
)

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class CategorySpending:
    """Spend against one category's per-period allowance."""

    category: str
    spent: Decimal
    budget: Decimal
    remaining: Decimal
    percent_used: int
    is_over: bool

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "spent": float(self.spent),
            "budget": float(self.budget),
            "remaining": float(self.remaining),
            "percentUsed": self.percent_used,
            "isOver": self.is_over,
        }


@dataclass(frozen=True)
class DiscretionarySummary:
    """Discretionary totals for a pay period."""

    total_budget: Decimal
    total_spent: Decimal
    remaining: Decimal
    by_category: List[CategorySpending] = field(default_factory=list)

    def category(self, name: str):
        """The breakdown row for a category, or None if it is not in the table."""
        for row in self.by_category:
            if row.category == name:
                return row
        return None

    def to_dict(self) -> dict:
        return {
            "totalBudget": float(self.total_budget),
            "totalSpent": float(self.total_spent),
            "remaining": float(self.remaining),
            "byCategory": [row.to_dict() for row in self.by_category],
        }


def is_spend(transaction: Transaction) -> bool:
    """Whether a transaction counts toward spending."""
    return not transaction.is_excluded and transaction.amount > 0


def bucket_spending(
    transactions: Iterable[Transaction], start: date, end: date
) -> Dict[str, Decimal]:
    """Sum spend per category label for transactions dated in [start, end].

    Blank labels go to "Other". Labels that are not discretionary categories
    keep their own bucket.
    """
    buckets: Dict[str, Decimal] = {}
    for transaction in transactions:
        if not (start <= transaction.date <= end) or not is_spend(transaction):
            continue
        category = transaction.category or DEFAULT_CATEGORY
        buckets[category] = buckets.get(category, Decimal("0")) + transaction.amount
    return buckets


def build_breakdown(
    spent_by_category: Mapping[str, Decimal],
    table: Mapping[str, CategoryAllowance] = DISCRETIONARY_CATEGORIES,
) -> List[CategorySpending]:
    """One row per category in the table, including ones with no spend."""
    rows = []
    for category, allowance in table.items():
        budget = allowance.semi_monthly
        spent = spent_by_category.get(category, Decimal("0"))
        percent_used = round_whole(spent / budget * 100) if budget > 0 else 0
        rows.append(
            CategorySpending(
                category=category,
                spent=spent,
                budget=budget,
                remaining=budget - spent,
                percent_used=percent_used,
                is_over=spent > budget,
            )
        )
    return rows


def aggregate_by_category(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
    table: Mapping[str, CategoryAllowance] = DISCRETIONARY_CATEGORIES,
) -> List[CategorySpending]:
    """Bucket spend in [start, end] and compare it to each category's allowance."""
    return build_breakdown(bucket_spending(transactions, start, end), table)


def summarize_discretionary(
    by_category: List[CategorySpending],
    table: Mapping[str, CategoryAllowance] = DISCRETIONARY_CATEGORIES,
) -> DiscretionarySummary:
    """Roll the per-category rows up into pay-period totals."""
    total_budget = total_semi_monthly(table)
    total_spent = sum((row.spent for row in by_category), Decimal("0"))
    return DiscretionarySummary(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=total_budget - total_spent,
        by_category=by_category,
    )
