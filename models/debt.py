"""Debt model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

DEBT_TYPES = ("irs", "car_loan", "personal_loan", "credit_card", "other")


@dataclass
class Debt:
    """Represents money owed.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Display name, e.g. "Capital One Venture".
        type: One of DEBT_TYPES.
        monthly_payment: Required monthly payment.
        original_amount: Amount originally borrowed, if known.
        current_balance: Balance still owed; None when unknown.
        interest_rate: Annual rate in percent, if known.
        notes: Free-form notes shown to the advisor.
        promo_end_date: Last day of a promotional rate, if any.
        promo_rate: Promotional rate in percent.
        post_promo_rate: Rate in percent once the promotion ends.
    """

    id: int
    name: str
    type: str
    monthly_payment: Decimal
    original_amount: Optional[Decimal] = None
    current_balance: Optional[Decimal] = None
    interest_rate: Optional[Decimal] = None
    notes: Optional[str] = None
    promo_end_date: Optional[date] = None
    promo_rate: Optional[Decimal] = None
    post_promo_rate: Optional[Decimal] = None
    last_updated: Optional[datetime] = None

    @property
    def has_promo(self) -> bool:
        return self.promo_end_date is not None

    def to_dict(self) -> dict:
        """Convert debt to a JSON-ready dictionary."""

        def _num(value: Optional[Decimal]) -> Optional[float]:
            return float(value) if value is not None else None

        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "originalAmount": _num(self.original_amount),
            "balance": _num(self.current_balance),
            "interestRate": _num(self.interest_rate),
            "monthlyPayment": float(self.monthly_payment),
            "notes": self.notes,
            "promoEndDate": (
                self.promo_end_date.isoformat() if self.promo_end_date else None
            ),
            "promoRate": _num(self.promo_rate),
            "postPromoRate": _num(self.post_promo_rate),
        }
