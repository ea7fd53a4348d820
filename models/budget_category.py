"""Budget category model for the persisted monthly budget."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class BudgetCategory:
    """A user-editable monthly budget line.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique).
        monthly_budget: Monthly allowance.
        is_fixed: Committed cost such as rent or a loan payment.
        is_excluded: Never counted toward the operating budget (one-off costs).
    """

    id: int
    name: str
    monthly_budget: Decimal
    is_fixed: bool = False
    is_excluded: bool = False
