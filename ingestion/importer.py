"""Import a parsed CSV export into storage.

Shared by the CLI `transactions import` command and the upload endpoint.
"""

import gzip
import io
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from ingestion.csv_import import ingest
from logger import get_logger
from models.transaction import Transaction
from tools.spending import is_spend

logger = get_logger("ingestion")


@dataclass
class ImportResult:
    imported: int
    duplicates: int
    total_parsed: int
    date_range: Optional[Tuple[date, date]] = None
    categories: List[str] = field(default_factory=list)
    total_spend: Decimal = Decimal("0.00")
    skipped_rows: int = 0
    data_import_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "imported": self.imported,
            "duplicates": self.duplicates,
            "totalParsed": self.total_parsed,
            "dateRange": (
                {
                    "start": self.date_range[0].isoformat(),
                    "end": self.date_range[1].isoformat(),
                }
                if self.date_range
                else None
            ),
            "categories": self.categories,
            "totalSpend": float(self.total_spend),
        }


def summarize(new_transactions: List[Transaction]) -> dict:
    """Date range, categories and total spend of newly stored rows."""
    if not new_transactions:
        return {"date_range": None, "categories": [], "total_spend": Decimal("0.00")}

    dates = [t.date for t in new_transactions]
    return {
        "date_range": (min(dates), max(dates)),
        "categories": sorted({t.category for t in new_transactions}),
        "total_spend": sum(
            (t.amount for t in new_transactions if is_spend(t)),
            Decimal("0.00"),
        ),
    }


class TransactionImporter:
    """Parses, categorizes, deduplicates and stores a CSV export.

    Args:
        services: Services container.
    """

    def __init__(self, services):
        self.services = services

    def import_text(
        self, content: str, filename: Optional[str] = None, negate: bool = False
    ) -> ImportResult:
        """Import the text of one CSV file.

        Args:
            content: Full file contents.
            filename: Original file name, used for the archive copy.
            negate: Flip every amount before storing.

        Returns:
            ImportResult describing what was stored.

        Raises:
            NoTransactionsError: If nothing in the file parses.
        """
        parsed = ingest(io.StringIO(content), negate=negate)
        transactions = parsed.transactions

        categorizer = self.services.categorizer
        for transaction in transactions:
            if transaction.category is None:
                prediction = categorizer.categorize(
                    transaction.description, transaction.amount
                )
                transaction.category = prediction.category

        # Same hash twice in one file counts as a duplicate, not two rows
        unique: List[Transaction] = []
        seen = set()
        for transaction in transactions:
            if transaction.hash in seen:
                continue
            seen.add(transaction.hash)
            unique.append(transaction)

        stored = self.services.transactions.existing_hashes(seen)
        new_transactions = [t for t in unique if t.hash not in stored]

        archive_filename = self._archive(content, filename)
        data_import = self.services.data_imports.create(archive_filename)
        logger.info(f"Created data import record (ID: {data_import.id})")

        for transaction in new_transactions:
            transaction.data_import_id = data_import.id

        inserted = self.services.transactions.bulk_create(new_transactions)
        duplicates = len(transactions) - inserted
        self.services.data_imports.update_counts(data_import.id, inserted, duplicates)
        self.services.profile.touch_transaction_import()

        logger.info(f"Imported {inserted} transaction(s), {duplicates} duplicate(s) skipped")

        return ImportResult(
            imported=inserted,
            duplicates=duplicates,
            total_parsed=len(transactions),
            skipped_rows=parsed.skipped_rows,
            data_import_id=data_import.id,
            **summarize(new_transactions),
        )

    def _archive(self, content: str, filename: Optional[str]) -> Optional[str]:
        """Write a gzipped copy of the upload when archiving is enabled."""
        config = self.services.config
        if not config.archive_enabled:
            return None

        config.archive_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", filename or "upload.csv")
        archive_filename = f"{timestamp}_{safe_name}.gz"
        archive_path = config.archive_dir / archive_filename

        with gzip.open(archive_path, "wt", encoding="utf-8") as f_out:
            f_out.write(content)

        logger.info(f"Archived CSV to: {archive_path}")
        return archive_filename
