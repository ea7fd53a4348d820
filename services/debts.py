"""Debt service for database operations."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from models.debt import Debt
from models.money import to_money, to_optional_money

_DEBT_SELECT_FIELDS = """id, name, type, original_amount, current_balance, interest_rate,
       monthly_payment, notes, promo_end_date, promo_rate, post_promo_rate, last_updated"""

# Fields that may be changed through update()
_UPDATABLE_FIELDS = {
    "current_balance",
    "interest_rate",
    "monthly_payment",
    "promo_end_date",
    "promo_rate",
    "post_promo_rate",
    "notes",
}


def parse_promo_end_date(value) -> Optional[date]:
    """Interpret a stored or submitted promo end date.

    Raises:
        ValueError: If the value is set but is not an ISO date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class DebtService:
    """Service for managing debts."""

    def __init__(self, db_manager):
        """Initialize the debt service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Debt]:
        """Get all debts ordered by name."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_DEBT_SELECT_FIELDS} FROM debts ORDER BY name, id"
            )
            return [self._row_to_debt(row) for row in cursor.fetchall()]

    def find(self, debt_id: int) -> Optional[Debt]:
        """Get a single debt by ID, or None."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_DEBT_SELECT_FIELDS} FROM debts WHERE id = ?", (debt_id,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_debt(row)
            return None

    def create(
        self,
        name: str,
        debt_type: str,
        monthly_payment: Decimal,
        *,
        original_amount: Optional[Decimal] = None,
        current_balance: Optional[Decimal] = None,
        interest_rate: Optional[Decimal] = None,
        notes: Optional[str] = None,
        promo_end_date: Optional[date] = None,
        promo_rate: Optional[Decimal] = None,
        post_promo_rate: Optional[Decimal] = None,
    ) -> Debt:
        """Create a new debt.

        Raises:
            ValueError: If promo_end_date is not a date.
            sqlite3.IntegrityError: If the debt type is not recognised.
        """
        promo_end_date = parse_promo_end_date(promo_end_date)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO debts (name, type, original_amount, current_balance,
                    interest_rate, monthly_payment, notes, promo_end_date, promo_rate,
                    post_promo_rate, last_updated)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    name,
                    debt_type,
                    _to_float(original_amount),
                    _to_float(current_balance),
                    _to_float(interest_rate),
                    float(to_money(monthly_payment)),
                    notes,
                    promo_end_date.isoformat() if promo_end_date else None,
                    _to_float(promo_rate),
                    _to_float(post_promo_rate),
                    datetime.now().isoformat(timespec="seconds"),
                ),
            )
            conn.commit()
            debt_id = cursor.lastrowid

        return self.find(debt_id)

    def update(self, debt_id: int, **fields) -> bool:
        """Update the given fields of one debt and stamp last_updated.

        Args:
            debt_id: The debt ID to update.
            **fields: Column values keyed by name; see _UPDATABLE_FIELDS.

        Returns:
            True if a debt was updated, False if not found.

        Raises:
            ValueError: If unsupported field names are provided, or the promo
                        end date is not a date.
        """
        invalid_fields = set(fields) - _UPDATABLE_FIELDS
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        values = []
        for field, value in fields.items():
            if field == "promo_end_date":
                parsed = parse_promo_end_date(value)
                value = parsed.isoformat() if parsed else None
            elif field != "notes":
                value = _to_float(value)
            values.append(value)

        set_clause = ", ".join([f"{field} = ?" for field in fields] + ["last_updated = ?"])
        values.append(datetime.now().isoformat(timespec="seconds"))
        values.append(debt_id)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"UPDATE debts SET {set_clause} WHERE id = ?", tuple(values)
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_debt(self, row: tuple) -> Debt:
        """Convert a database row to a Debt object."""
        return Debt(
            id=row[0],
            name=row[1],
            type=row[2],
            original_amount=to_optional_money(row[3]),
            current_balance=to_optional_money(row[4]),
            interest_rate=to_optional_money(row[5]),
            monthly_payment=to_money(row[6]),
            notes=row[7],
            promo_end_date=parse_promo_end_date(row[8]),
            promo_rate=to_optional_money(row[9]),
            post_promo_rate=to_optional_money(row[10]),
            last_updated=datetime.fromisoformat(row[11]) if row[11] else None,
        )


def _to_float(value) -> Optional[float]:
    if value is None:
        return None
    return float(to_money(value))
