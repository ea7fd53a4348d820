"""Budget category service for database operations."""

from decimal import Decimal
from typing import List, Optional
from models.budget_category import BudgetCategory
from models.money import to_money

_CATEGORY_SELECT_FIELDS = "id, name, monthly_budget, is_fixed, is_excluded"


class BudgetCategoryService:
    """Service for managing the persisted monthly budget."""

    def __init__(self, db_manager):
        """Initialize the budget category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[BudgetCategory]:
        """Get all budget categories from the database.

        Returns:
            List of BudgetCategory objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM budget_categories ORDER BY name"
            )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find_by_name(self, name: str) -> Optional[BudgetCategory]:
        """Get a single budget category by name.

        Args:
            name: The category name to find.

        Returns:
            BudgetCategory object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM budget_categories WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def create(
        self,
        name: str,
        monthly_budget: Decimal,
        is_fixed: bool = False,
        is_excluded: bool = False,
    ) -> BudgetCategory:
        """Create a new budget category.

        Args:
            name: Category name (must be unique).
            monthly_budget: Monthly allowance.
            is_fixed: Whether this is a committed cost.
            is_excluded: Whether to leave it out of the operating budget.

        Returns:
            The created BudgetCategory object with id populated.

        Raises:
            sqlite3.IntegrityError: If a category with this name exists.
        """
        amount = to_money(monthly_budget)
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO budget_categories (name, monthly_budget, is_fixed, is_excluded)
                VALUES (?, ?, ?, ?)
                """,
                (name, float(amount), int(is_fixed), int(is_excluded)),
            )
            conn.commit()
            category_id = cursor.lastrowid

        return BudgetCategory(
            id=category_id,
            name=name,
            monthly_budget=amount,
            is_fixed=is_fixed,
            is_excluded=is_excluded,
        )

    def update_budget(self, name: str, monthly_budget: Decimal) -> bool:
        """Change the monthly allowance of a category.

        Returns:
            True if the category was updated, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE budget_categories SET monthly_budget = ? WHERE name = ?",
                (float(to_money(monthly_budget)), name),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete(self, name: str) -> bool:
        """Delete a budget category by name.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM budget_categories WHERE name = ?", (name,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_category(self, row: tuple) -> BudgetCategory:
        return BudgetCategory(
            id=row[0],
            name=row[1],
            monthly_budget=to_money(row[2]),
            is_fixed=bool(row[3]),
            is_excluded=bool(row[4]),
        )
