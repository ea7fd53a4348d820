"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from models.transaction import Transaction


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


def make_transaction(
    day: date,
    amount: str,
    category: str = "Groceries",
    description: str = None,
    is_excluded: bool = False,
) -> Transaction:
    """Build an unsaved transaction; the description defaults to a unique one."""
    return Transaction.create_with_hash(
        transaction_date=day,
        description=description or f"{category} {day.isoformat()} {amount}",
        amount=Decimal(amount),
        category=category,
        is_excluded=is_excluded,
    )
