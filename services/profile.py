"""Household profile service for database operations."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from models.money import to_money
from models.user_profile import UserProfile

_PROFILE_ID = 1


class ProfileService:
    """Service for the single household profile row."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def get(self) -> UserProfile:
        """Get the profile, or a default one if none has been saved yet."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT name, net_monthly_income, pay_schedule, onboarding_complete,
                       last_balance_update, last_transaction_import
                FROM user_profile WHERE id = ?
                """,
                (_PROFILE_ID,),
            )
            row = cursor.fetchone()

        if row is None:
            return UserProfile()

        return UserProfile(
            name=row[0],
            net_monthly_income=to_money(row[1]),
            pay_schedule=row[2],
            onboarding_complete=bool(row[3]),
            last_balance_update=datetime.fromisoformat(row[4]) if row[4] else None,
            last_transaction_import=datetime.fromisoformat(row[5]) if row[5] else None,
        )

    def save(
        self,
        name: Optional[str] = None,
        net_monthly_income: Optional[Decimal] = None,
        pay_schedule: Optional[str] = None,
    ) -> UserProfile:
        """Create or update the profile. Fields left as None keep their value."""
        current = self.get()
        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO user_profile (id, name, net_monthly_income, pay_schedule)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    net_monthly_income = excluded.net_monthly_income,
                    pay_schedule = excluded.pay_schedule
                """,
                (
                    _PROFILE_ID,
                    name if name is not None else current.name,
                    float(
                        to_money(
                            net_monthly_income
                            if net_monthly_income is not None
                            else current.net_monthly_income
                        )
                    ),
                    pay_schedule if pay_schedule is not None else current.pay_schedule,
                ),
            )
            conn.commit()

        return self.get()

    def mark_onboarding_complete(self) -> None:
        self._touch("onboarding_complete = 1, last_balance_update = ?")

    def touch_balance_update(self) -> None:
        self._touch("last_balance_update = ?")

    def touch_transaction_import(self) -> None:
        self._touch("last_transaction_import = ?")

    def _touch(self, set_clause: str) -> None:
        """Apply a timestamp update, creating the default row first if needed."""
        now = datetime.now().isoformat(timespec="seconds")
        with self.db_manager.connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO user_profile (id) VALUES (?)", (_PROFILE_ID,)
            )
            conn.execute(
                f"UPDATE user_profile SET {set_clause} WHERE id = ?", (now, _PROFILE_ID)
            )
            conn.commit()
