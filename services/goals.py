"""Goal service for database operations."""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from models.goal import Goal
from models.money import to_money

_GOAL_SELECT_FIELDS = "id, name, target_amount, current_amount, priority, target_date, notes"


class GoalService:
    """Service for managing savings goals."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def find_all(self) -> List[Goal]:
        """Get all goals, highest priority (lowest number) first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_GOAL_SELECT_FIELDS} FROM goals ORDER BY priority, id"
            )
            return [self._row_to_goal(row) for row in cursor.fetchall()]

    def find(self, goal_id: int) -> Optional[Goal]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_GOAL_SELECT_FIELDS} FROM goals WHERE id = ?", (goal_id,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_goal(row)
            return None

    def create(
        self,
        name: str,
        target_amount: Decimal,
        current_amount: Decimal = Decimal("0"),
        priority: int = 99,
        target_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Goal:
        """Create a new goal.

        Returns:
            The created Goal object with id populated.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO goals (name, target_amount, current_amount, priority, target_date, notes)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    name,
                    float(to_money(target_amount)),
                    float(to_money(current_amount)),
                    priority,
                    target_date.isoformat() if target_date else None,
                    notes,
                ),
            )
            conn.commit()
            goal_id = cursor.lastrowid

        return self.find(goal_id)

    def update_progress(self, goal_id: int, current_amount: Decimal) -> bool:
        """Set how much has been saved toward a goal.

        Returns:
            True if the goal was updated, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE goals SET current_amount = ? WHERE id = ?",
                (float(to_money(current_amount)), goal_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_goal(self, row: tuple) -> Goal:
        return Goal(
            id=row[0],
            name=row[1],
            target_amount=to_money(row[2]),
            current_amount=to_money(row[3]),
            priority=row[4],
            target_date=date.fromisoformat(row[5]) if row[5] else None,
            notes=row[6],
        )
