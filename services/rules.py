"""Rule service for database operations."""

from typing import List
from models.rule import Rule


class RuleService:
    """Service for managing the advisor's decision rules."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def find_all(self, active_only: bool = False) -> List[Rule]:
        """Get rules ordered by id.

        Args:
            active_only: If True, only return rules with is_active set.
        """
        query = "SELECT id, name, condition, action, is_active FROM rules"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY id"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query)
            return [
                Rule(
                    id=row[0],
                    name=row[1],
                    condition=row[2],
                    action=row[3],
                    is_active=bool(row[4]),
                )
                for row in cursor.fetchall()
            ]

    def create(self, name: str, condition: str, action: str, is_active: bool = True) -> Rule:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO rules (name, condition, action, is_active) VALUES (?, ?, ?, ?)",
                (name, condition, action, int(is_active)),
            )
            conn.commit()
            rule_id = cursor.lastrowid

        return Rule(
            id=rule_id, name=name, condition=condition, action=action, is_active=is_active
        )

    def set_active(self, rule_id: int, is_active: bool) -> bool:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE rules SET is_active = ? WHERE id = ?", (int(is_active), rule_id)
            )
            conn.commit()
            return cursor.rowcount > 0
