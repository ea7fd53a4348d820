from ingestion.csv_import import NoTransactionsError, ingest, parse_amount, parse_date
from ingestion.importer import ImportResult, TransactionImporter

__all__ = [
    "ImportResult",
    "NoTransactionsError",
    "TransactionImporter",
    "ingest",
    "parse_amount",
    "parse_date",
]
