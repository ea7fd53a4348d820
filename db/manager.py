"""Database manager for SQLite connections and path management."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir
from logger import get_logger

logger = get_logger("db")


class StorageError(Exception):
    """Raised when a read or write against the database fails.

    Integrity violations (duplicate names, duplicate hashes) are not wrapped;
    callers that care about them catch sqlite3.IntegrityError directly.
    """


class DatabaseManager:
    """Manages database connections and paths.

    Each call to connect() opens its own connection, so services can be used
    from the snapshot worker threads without sharing a connection.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config, timeout: float = 10.0):
        self.config = config
        self.timeout = timeout

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Yields:
            sqlite3.Connection: Database connection.

        Raises:
            StorageError: If the database cannot be opened or a statement fails.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(db_path, timeout=self.timeout)
        except sqlite3.Error as e:
            logger.error(f"Could not open database {db_path}: {e}")
            raise StorageError(f"Could not open database: {e}") from e

        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            logger.error(f"Database error on {db_path}: {e}")
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def get_db_path(self):
        """Get the current database path.

        Returns:
            Path: Path to the database file.
        """
        return self.config.db_path

    def get_migrations_dir(self):
        """Get the migrations directory path.

        Returns:
            Path: Path to the migrations directory.
        """
        return get_migrations_dir()
