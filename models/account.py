from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

ACCOUNT_TYPES = ("checking", "savings", "investment", "credit")

# Accounts whose balance counts as spendable cash
CASH_ACCOUNT_TYPES = ("checking", "savings")


@dataclass
class Account:
    id: int
    name: str  # human readable, e.g., "Chase Checking"
    type: str  # one of ACCOUNT_TYPES
    balance: Decimal
    institution: str = "Not specified"
    last_updated: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert account to a JSON-ready dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "institution": self.institution,
            "balance": float(self.balance),
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
        }
