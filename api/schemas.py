"""Request bodies accepted by the HTTP API."""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase keys from the web client, snake_case from Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequest(BaseModel):
    # Typed Any so an empty or non-string message gets our own 400 message
    message: Any = None


class BalanceUpdate(BaseModel):
    balance: Decimal


class AccountIn(CamelModel):
    name: str = Field(min_length=1)
    type: str
    balance: Decimal
    institution: Optional[str] = None


class AccountsPayload(BaseModel):
    accounts: List[AccountIn]


class DebtDelta(CamelModel):
    """An update to an existing debt (id set) or a new debt (id absent)."""

    id: Optional[int] = None
    name: Optional[str] = None
    type: str = "other"
    current_balance: Optional[Decimal] = None
    interest_rate: Optional[Decimal] = None
    monthly_payment: Optional[Decimal] = None
    promo_end_date: Optional[date] = None
    promo_rate: Optional[Decimal] = None
    post_promo_rate: Optional[Decimal] = None
    notes: Optional[str] = None


class DebtsPayload(BaseModel):
    debts: List[DebtDelta]


class GoalDelta(CamelModel):
    """An update to an existing goal (id set) or a new goal (id absent)."""

    id: Optional[int] = None
    name: Optional[str] = None
    target_amount: Optional[Decimal] = None
    current_amount: Optional[Decimal] = None
    priority: int = 99
    target_date: Optional[date] = None
    notes: Optional[str] = None


class GoalsPayload(BaseModel):
    goals: List[GoalDelta]


class TransactionCorrection(CamelModel):
    """A user correction to one stored transaction."""

    category: Optional[str] = None
    is_excluded: Optional[bool] = None
