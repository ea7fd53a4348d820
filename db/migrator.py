"""Applies the SQL files in db/migrations in filename order."""

from typing import List, Set

from logger import get_logger

logger = get_logger("db")


class Migrator:
    """Tracks applied migration files in the schema_migrations table.

    Args:
        db_manager: DatabaseManager for the target database.
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def available(self) -> List[str]:
        migrations_dir = self.db_manager.get_migrations_dir()
        if not migrations_dir.exists():
            return []
        return sorted(path.name for path in migrations_dir.glob("*.sql"))

    def applied(self) -> Set[str]:
        with self.db_manager.connect() as conn:
            self._ensure_table(conn)
            cursor = conn.execute("SELECT migration_file FROM schema_migrations")
            return {row[0] for row in cursor.fetchall()}

    def pending(self) -> List[str]:
        applied = self.applied()
        return [m for m in self.available() if m not in applied]

    def apply_pending(self) -> List[str]:
        """Apply every pending migration.

        Returns:
            Names of the migrations applied, in order.

        Raises:
            StorageError: If a migration fails; later ones are not attempted.
        """
        pending = self.pending()
        if not pending:
            return []

        migrations_dir = self.db_manager.get_migrations_dir()
        with self.db_manager.connect() as conn:
            for migration in pending:
                sql = (migrations_dir / migration).read_text()
                try:
                    conn.executescript(sql)
                    conn.execute(
                        "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                        (migration,),
                    )
                    conn.commit()
                except Exception as e:
                    conn.rollback()
                    logger.error(f"Error applying migration {migration}: {e}")
                    raise
                logger.info(f"Applied migration: {migration}")

        return pending

    def _ensure_table(self, conn) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                migration_file TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.commit()
