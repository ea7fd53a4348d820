"""Savings goal model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from models.money import round_whole


@dataclass
class Goal:
    """A savings target. Lower priority numbers come first."""

    id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    priority: int = 99
    target_date: Optional[date] = None
    notes: Optional[str] = None

    @property
    def percent_complete(self) -> int:
        """Whole-number progress toward the target; 0 when the target is not positive."""
        if self.target_amount <= 0:
            return 0
        return round_whole(self.current_amount / self.target_amount * 100)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "targetAmount": float(self.target_amount),
            "currentAmount": float(self.current_amount),
            "priority": self.priority,
            "targetDate": self.target_date.isoformat() if self.target_date else None,
            "notes": self.notes,
            "percentComplete": self.percent_complete,
        }
