"""Transaction service for database operations."""

from typing import Iterable, List, Optional, Set
from datetime import date, datetime
from models.money import to_money
from models.transaction import Transaction

# SQL Query Constants
_TRANSACTION_SELECT_FIELDS = """id, date, description, amount, category, is_excluded,
       hash, data_import_id, created_at"""

_TRANSACTION_INSERT_FIELDS = """date, description, amount, category, is_excluded,
    hash, data_import_id"""

# Automatically generate placeholders from field count
_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_INSERT_FIELDS.split(',')))})"
)

# SQLite limits the number of bound parameters per statement
_HASH_LOOKUP_CHUNK = 500


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, transaction: Transaction) -> Transaction:
        """Create a single transaction in the database.

        Args:
            transaction: Transaction object to insert.

        Returns:
            The Transaction with its id populated.

        Raises:
            sqlite3.IntegrityError: If a transaction with the same hash exists.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                INSERT INTO transactions ({_TRANSACTION_INSERT_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                self._to_params(transaction),
            )
            conn.commit()
            transaction.id = cursor.lastrowid

        return transaction

    def bulk_create(self, transactions: List[Transaction]) -> int:
        """Insert transactions, silently skipping any whose hash is already stored.

        Args:
            transactions: List of Transaction objects to insert.

        Returns:
            Number of transactions actually inserted.
        """
        if not transactions:
            return 0

        with self.db_manager.connect() as conn:
            before = conn.total_changes
            conn.executemany(
                f"""
                INSERT OR IGNORE INTO transactions ({_TRANSACTION_INSERT_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                [self._to_params(t) for t in transactions],
            )
            conn.commit()
            return conn.total_changes - before

    def existing_hashes(self, hashes: Iterable[str]) -> Set[str]:
        """Return the subset of the given hashes that are already stored."""
        hashes = list(set(hashes))
        found: Set[str] = set()
        if not hashes:
            return found

        with self.db_manager.connect() as conn:
            for start in range(0, len(hashes), _HASH_LOOKUP_CHUNK):
                chunk = hashes[start : start + _HASH_LOOKUP_CHUNK]
                placeholders = ", ".join(["?"] * len(chunk))
                cursor = conn.execute(
                    f"SELECT hash FROM transactions WHERE hash IN ({placeholders})",
                    chunk,
                )
                found.update(row[0] for row in cursor.fetchall())

        return found

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID, or None."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE id = ?
                """,
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def get_transactions_by_date_range(
        self,
        start_date: date,
        end_date: date,
        *,
        include_excluded: bool = True,
    ) -> List[Transaction]:
        """Get transactions whose date is within [start_date, end_date].

        Args:
            start_date: First day of the window (inclusive).
            end_date: Last day of the window (inclusive).
            include_excluded: If False, leave out transactions flagged excluded.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        query = f"""
            SELECT {_TRANSACTION_SELECT_FIELDS}
            FROM transactions
            WHERE date >= ? AND date <= ?
        """
        params = [start_date.isoformat(), end_date.isoformat()]

        if not include_excluded:
            query += " AND is_excluded = 0"

        query += " ORDER BY date DESC, id"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_recent(self, limit: int = 50) -> List[Transaction]:
        """Get the newest transactions by date."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                ORDER BY date DESC, id DESC
                LIMIT ?
                """,
                (limit,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def set_excluded(self, transaction_id: int, is_excluded: bool) -> bool:
        """Flag or unflag a transaction as excluded from spending totals."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE transactions SET is_excluded = ? WHERE id = ?",
                (int(is_excluded), transaction_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def set_category(self, transaction_id: int, category: str) -> bool:
        """Re-label a transaction's category."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE transactions SET category = ? WHERE id = ?",
                (category, transaction_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def _to_params(self, t: Transaction) -> tuple:
        return (
            t.date.isoformat(),
            t.description,
            float(t.amount),
            t.category,
            int(t.is_excluded),
            t.hash,
            t.data_import_id,
        )

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            date=date.fromisoformat(row[1]),
            description=row[2],
            amount=to_money(row[3]),
            category=row[4],
            is_excluded=bool(row[5]),
            hash=row[6],
            data_import_id=row[7],
            created_at=datetime.fromisoformat(row[8]) if row[8] else None,
        )
