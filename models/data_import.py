"""DataImport model representing a CSV import operation."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class DataImport:
    """Represents a data import operation.

    Attributes:
        id: Unique identifier (auto-generated).
        filename: Name of the archived file (None if archiving disabled).
        imported_count: Rows inserted by this import.
        duplicate_count: Rows skipped because they were already stored.
        created_at: Timestamp when the import was created.
    """

    id: int
    filename: Optional[str]
    imported_count: int
    duplicate_count: int
    created_at: datetime
