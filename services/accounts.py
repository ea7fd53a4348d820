"""Account service for database operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from models.account import Account
from models.money import to_money

_ACCOUNT_SELECT_FIELDS = "id, name, type, institution, current_balance, last_updated"


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db_manager):
        """Initialize the account service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Account]:
        """Get all accounts from the database.

        Returns:
            List of Account objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts ORDER BY name, id"
            )
            return [self._row_to_account(row) for row in cursor.fetchall()]

    def find(self, account_id: int) -> Optional[Account]:
        """Get a single account by ID.

        Args:
            account_id: The account ID to find.

        Returns:
            Account object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts WHERE id = ?",
                (account_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_account(row)
            return None

    def create(
        self,
        name: str,
        account_type: str,
        balance: Decimal,
        institution: Optional[str] = None,
    ) -> Account:
        """Create a new account.

        Args:
            name: Display name.
            account_type: One of checking, savings, investment, credit.
            balance: Current balance.
            institution: Bank or broker name.

        Returns:
            The created Account object with id populated.

        Raises:
            sqlite3.IntegrityError: If the account type is not recognised.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO accounts (name, type, institution, current_balance, last_updated)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    name,
                    account_type,
                    institution or "Not specified",
                    float(to_money(balance)),
                    datetime.now().isoformat(timespec="seconds"),
                ),
            )
            conn.commit()
            account_id = cursor.lastrowid

        return self.find(account_id)

    def update_balance(self, account_id: int, balance: Decimal) -> Optional[Account]:
        """Set an account's current balance and stamp last_updated.

        Args:
            account_id: The account ID to update.
            balance: New balance.

        Returns:
            The updated Account, or None if no account has that ID.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE accounts SET current_balance = ?, last_updated = ? WHERE id = ?",
                (
                    float(to_money(balance)),
                    datetime.now().isoformat(timespec="seconds"),
                    account_id,
                ),
            )
            conn.commit()

            if cursor.rowcount == 0:
                return None

        return self.find(account_id)

    def replace_all(self, accounts: List[dict]) -> int:
        """Delete every account and insert the given ones.

        Used only by onboarding bulk-save. The delete and the inserts are
        separate statements; if an insert fails the earlier ones stay.

        Args:
            accounts: Dicts with name, type, balance and optional institution.

        Returns:
            Number of accounts inserted.
        """
        with self.db_manager.connect() as conn:
            conn.execute("DELETE FROM accounts")
            conn.commit()

        for account in accounts:
            self.create(
                account["name"],
                account["type"],
                account["balance"],
                account.get("institution"),
            )
        return len(accounts)

    def _row_to_account(self, row: tuple) -> Account:
        """Convert a database row to an Account object."""
        return Account(
            id=row[0],
            name=row[1],
            type=row[2],
            institution=row[3],
            balance=to_money(row[4]),
            last_updated=datetime.fromisoformat(row[5]) if row[5] else None,
        )
