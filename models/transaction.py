from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
import hashlib

from models.money import to_money


def compute_hash(transaction_date: date, description: str, amount: Decimal) -> str:
    """Content hash identifying a transaction by (date, description, amount)."""
    raw = f"{transaction_date.isoformat()}{description}{to_money(amount)}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


@dataclass
class Transaction:
    id: Optional[int]  # None until stored
    date: date
    description: str
    amount: Decimal  # positive = money spent, negative = refund/income
    category: str
    hash: str
    is_excluded: bool = False
    data_import_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create_with_hash(
        cls,
        transaction_date: date,
        description: str,
        amount: Decimal,
        category: Optional[str] = None,
        is_excluded: bool = False,
    ) -> "Transaction":
        """Create an unsaved Transaction with its dedup hash filled in."""
        amount = to_money(amount)
        return cls(
            id=None,
            date=transaction_date,
            description=description,
            amount=amount,
            category=category or "Other",
            hash=compute_hash(transaction_date, description, amount),
            is_excluded=is_excluded,
        )

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-ready dictionary."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
            "category": self.category,
            "isExcluded": self.is_excluded,
        }
