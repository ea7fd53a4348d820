#!/usr/bin/env python3

import sys
from pathlib import Path
from ingestion import NoTransactionsError, TransactionImporter
from logger import get_logger

logger = get_logger()

# A user correction is trusted above the categorizer's learning threshold
CORRECTION_CONFIDENCE = 0.9


def cmd_import(args, services):
    """Import transactions from a CSV export.

    Args:
        args: Parsed command-line arguments with csv_file and negate
        services: Services container
    """
    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        logger.error(f"File not found: {args.csv_file}")
        sys.exit(1)

    logger.info(f"Importing transactions from {csv_path}")
    if args.negate:
        logger.info("Amounts will be negated (file lists spending as negative)")

    content = csv_path.read_text(encoding="utf-8-sig")
    try:
        result = TransactionImporter(services).import_text(
            content, filename=csv_path.name, negate=args.negate
        )
    except NoTransactionsError as e:
        logger.error(f"{e}")
        logger.error(f"Headers: {e.headers}")
        if e.sample_row:
            logger.error(f"First row: {e.sample_row}")
        sys.exit(1)

    logger.info("-" * 80)
    logger.info(f"✓ Imported {result.imported} transaction(s)")
    if result.duplicates:
        logger.info(f"  ({result.duplicates} duplicate transaction(s) skipped)")
    if result.skipped_rows:
        logger.info(f"  ({result.skipped_rows} unparseable row(s) skipped)")
    if result.date_range:
        start, end = result.date_range
        logger.info(f"  Date range: {start.isoformat()} to {end.isoformat()}")
    if result.categories:
        logger.info(f"  Categories: {', '.join(result.categories)}")
    logger.info(f"  Total spend: ${result.total_spend:,.2f}")


def cmd_list(args, services):
    """List the most recent transactions."""
    transactions = services.transactions.find_recent(args.limit)

    if not transactions:
        logger.info("No transactions found.")
        return

    for t in transactions:
        excluded = " (excluded)" if t.is_excluded else ""
        logger.info(
            f"{t.id:>6}  {t.date.isoformat()}  {t.description[:40]:<40} "
            f"{t.category:<18} ${t.amount:>10,.2f}{excluded}"
        )

    logger.info(f"\nShowing {len(transactions)} transaction(s)")


def cmd_categorize(args, services):
    """Re-label a transaction and remember the merchant for future imports."""
    transaction = services.transactions.find(args.transaction_id)
    if transaction is None:
        logger.error(f"Transaction not found: {args.transaction_id}")
        sys.exit(1)

    services.transactions.set_category(transaction.id, args.category)
    learned = services.categorizer.learn(
        transaction.description, args.category, CORRECTION_CONFIDENCE
    )

    logger.info(
        f"✓ {transaction.description}: {transaction.category} -> {args.category}"
    )
    if learned:
        logger.info("  Future imports from this merchant will use the new category")


def cmd_exclude(args, services):
    """Flag a transaction so it no longer counts toward spending."""
    excluded = not args.undo
    if not services.transactions.set_excluded(args.transaction_id, excluded):
        logger.error(f"Transaction not found: {args.transaction_id}")
        sys.exit(1)

    state = "excluded from" if excluded else "included in"
    logger.info(f"✓ Transaction {args.transaction_id} is now {state} spending totals")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Import, list and correct transactions",
        description="Import CSV exports and review transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    import_parser = transactions_subparsers.add_parser(
        "import", help="Import transactions from a CSV file"
    )
    import_parser.add_argument("csv_file", help="Path to the CSV export")
    import_parser.add_argument(
        "--negate",
        action="store_true",
        help="Flip amount signs, for exports that list spending as negative",
    )
    import_parser.set_defaults(func=cmd_import)

    list_parser = transactions_subparsers.add_parser(
        "list", help="List recent transactions"
    )
    list_parser.add_argument(
        "--limit", type=int, default=50, help="Number of transactions (default 50)"
    )
    list_parser.set_defaults(func=cmd_list)

    categorize_parser = transactions_subparsers.add_parser(
        "categorize", help="Correct a transaction's category"
    )
    categorize_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    categorize_parser.add_argument("category", help="Correct category name")
    categorize_parser.set_defaults(func=cmd_categorize)

    exclude_parser = transactions_subparsers.add_parser(
        "exclude", help="Exclude a transaction from spending totals"
    )
    exclude_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    exclude_parser.add_argument(
        "--undo", action="store_true", help="Count the transaction again"
    )
    exclude_parser.set_defaults(func=cmd_exclude)
