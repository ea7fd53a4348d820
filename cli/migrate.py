#!/usr/bin/env python3

from db.migrator import Migrator
from logger import get_logger

logger = get_logger("cli")


def cmd_status(args, services):
    """Show which migrations have been applied."""
    migrator = Migrator(services.db_manager)
    available = migrator.available()

    if not available:
        logger.info("No migrations found.")
        return

    applied = migrator.applied()

    logger.info("Migration Status:")
    logger.info("================")
    for migration in available:
        logger.info(f"{migration}: {'APPLIED' if migration in applied else 'PENDING'}")

    pending_count = len([m for m in available if m not in applied])
    logger.info(f"\nTotal migrations: {len(available)}")
    logger.info(f"Pending: {pending_count}")


def cmd_apply(args, services):
    """Apply pending migrations."""
    applied = Migrator(services.db_manager).apply_pending()
    if not applied:
        logger.info("No pending migrations.")
        return
    logger.info(f"Successfully applied {len(applied)} migration(s).")


def setup_parser(subparsers):
    """Setup migrate subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "migrate",
        help="Database migrations",
        description="Create or upgrade the SQLite schema",
    )

    migrate_subparsers = parser.add_subparsers(
        title="subcommands",
        dest="subcommand",
        required=True,
    )

    migrate_subparsers.add_parser("status", help="Show migration status").set_defaults(
        func=cmd_status
    )
    migrate_subparsers.add_parser("apply", help="Apply pending migrations").set_defaults(
        func=cmd_apply
    )
