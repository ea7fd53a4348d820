"""DataImport service for database operations."""

from typing import List, Optional
from datetime import datetime
from models.data_import import DataImport

_IMPORT_SELECT_FIELDS = "id, filename, imported_count, duplicate_count, created_at"


class DataImportService:
    """Service for managing data import records."""

    def __init__(self, db_manager):
        """Initialize the data import service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(
        self, filename: Optional[str], imported_count: int = 0, duplicate_count: int = 0
    ) -> DataImport:
        """Create a new data import record.

        Args:
            filename: Name of the archived file (None if archiving disabled).
            imported_count: Rows inserted by the import.
            duplicate_count: Rows skipped as duplicates.

        Returns:
            The created DataImport object with id and created_at populated.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO data_imports (filename, imported_count, duplicate_count)
                VALUES (?, ?, ?)
                """,
                (filename, imported_count, duplicate_count),
            )
            conn.commit()
            import_id = cursor.lastrowid

            # Fetch the created record to get the created_at timestamp
            cursor = conn.execute(
                f"SELECT {_IMPORT_SELECT_FIELDS} FROM data_imports WHERE id = ?",
                (import_id,),
            )
            row = cursor.fetchone()

            return self._row_to_data_import(row)

    def update_counts(self, data_import_id: int, imported_count: int, duplicate_count: int) -> None:
        """Record the outcome of an import once its rows have been inserted."""
        with self.db_manager.connect() as conn:
            conn.execute(
                "UPDATE data_imports SET imported_count = ?, duplicate_count = ? WHERE id = ?",
                (imported_count, duplicate_count, data_import_id),
            )
            conn.commit()

    def find(self, data_import_id: int) -> Optional[DataImport]:
        """Get a single data import by ID, or None."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_IMPORT_SELECT_FIELDS} FROM data_imports WHERE id = ?",
                (data_import_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_data_import(row)
            return None

    def find_all(self) -> List[DataImport]:
        """Get all data imports, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_IMPORT_SELECT_FIELDS} FROM data_imports ORDER BY id DESC"
            )
            return [self._row_to_data_import(row) for row in cursor.fetchall()]

    def _row_to_data_import(self, row: tuple) -> DataImport:
        return DataImport(
            id=row[0],
            filename=row[1],
            imported_count=row[2],
            duplicate_count=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )
