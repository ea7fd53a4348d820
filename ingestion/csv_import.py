"""Header-driven CSV parsing for transaction exports.

Columns are found by name, case-insensitively, from a list of synonyms per
field, so exports from different banks and aggregators can be read without a
module per institution.
"""

import csv
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, TextIO

from logger import get_logger
from models.transaction import Transaction

logger = get_logger("ingestion")

COLUMN_SYNONYMS: Dict[str, tuple] = {
    "date": ("date", "transaction date", "posted date", "post date", "posting date"),
    "description": ("description", "merchant", "name", "payee", "original description"),
    "amount": ("amount", "value", "transaction amount"),
    "category": ("category", "bank category"),
}

REQUIRED_COLUMNS = ("date", "description", "amount")

DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d")


class NoTransactionsError(ValueError):
    """Raised when a file yields no usable rows.

    Attributes:
        headers: The header row as read.
        sample_row: The first data row, if any, to help fix the source file.
    """

    def __init__(self, message: str, headers: List[str], sample_row: Optional[List[str]]):
        super().__init__(message)
        self.headers = headers
        self.sample_row = sample_row


@dataclass
class ParsedCsv:
    """Result of parsing one file."""

    headers: List[str]
    transactions: List[Transaction] = field(default_factory=list)
    skipped_rows: int = 0


def parse_date(value: str) -> date:
    """Parse MM/DD/YYYY or YYYY-MM-DD.

    Raises:
        ValueError: If the value matches neither format.
    """
    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value!r}")


def parse_amount(value: str) -> Decimal:
    """Parse an amount, stripping currency symbols and thousands separators.

    Parenthesized values are negative: "(12.50)" -> Decimal("-12.50").

    Raises:
        ValueError: If the value is not a number.
    """
    text = value.strip().replace("$", "").replace(",", "").replace(" ", "")
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Unrecognised amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Unrecognised amount: {value!r}")
    return -amount if negative else amount


def map_columns(headers: List[str]) -> Dict[str, int]:
    """Find the index of each known field in the header row."""
    normalized = [h.strip().strip('"').lower() for h in headers]
    columns: Dict[str, int] = {}
    for field_name, synonyms in COLUMN_SYNONYMS.items():
        for synonym in synonyms:
            if synonym in normalized:
                columns[field_name] = normalized.index(synonym)
                break
    return columns


def row_to_transaction(
    row: List[str], columns: Dict[str, int], negate: bool = False
) -> Transaction:
    """Build a Transaction from one CSV row.

    A missing or blank category is left as None for the categorizer to fill.

    Raises:
        ValueError: If the date, description or amount is missing or malformed.
    """

    def cell(name: str) -> str:
        index = columns.get(name)
        if index is None or index >= len(row):
            return ""
        return row[index].strip()

    description = cell("description")
    if not description:
        raise ValueError("Missing description")

    amount = parse_amount(cell("amount"))
    if negate:
        amount = -amount

    transaction = Transaction.create_with_hash(
        transaction_date=parse_date(cell("date")),
        description=description,
        amount=amount,
    )
    transaction.category = cell("category") or None
    return transaction


def ingest(source: TextIO, negate: bool = False) -> ParsedCsv:
    """Parse a CSV export into unsaved transactions.

    Args:
        source: Text stream with a header row followed by data rows.
        negate: Flip every amount; for exports that list spending as negative.

    Returns:
        ParsedCsv with the transactions that parsed cleanly.

    Raises:
        NoTransactionsError: If required columns are missing or no row parses.
    """
    reader = csv.reader(source)

    try:
        headers = [h.strip() for h in next(reader)]
    except StopIteration:
        raise NoTransactionsError("Empty CSV file", [], None)

    rows = [row for row in reader if any(cell.strip() for cell in row)]
    sample_row = rows[0] if rows else None

    columns = map_columns(headers)
    missing = [name for name in REQUIRED_COLUMNS if name not in columns]
    if missing:
        logger.error(f"CSV is missing required columns {missing}; header: {headers}")
        raise NoTransactionsError(
            f"Missing required columns: {', '.join(missing)}", headers, sample_row
        )

    parsed = ParsedCsv(headers=headers)
    for line_num, row in enumerate(rows, start=2):
        try:
            parsed.transactions.append(row_to_transaction(row, columns, negate))
        except ValueError as e:
            parsed.skipped_rows += 1
            logger.warning(f"Skipping line {line_num}: {row} - {e}")

    if not parsed.transactions:
        raise NoTransactionsError(
            "No valid transactions found in CSV", headers, sample_row
        )

    logger.info(
        f"Parsed {len(parsed.transactions)} transactions "
        f"({parsed.skipped_rows} row(s) skipped)"
    )
    return parsed
