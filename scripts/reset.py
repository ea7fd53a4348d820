#!/usr/bin/env python3
"""Reset script for Spendwise.

This script will:
1. Delete the data directory (including database, logs, and archives)
2. Apply migrations to create a fresh database

Run with: python -m scripts.reset
"""

import shutil
import sys

from config import get_config_path, load_config
from db.manager import DatabaseManager
from db.migrator import Migrator


def reset():
    """Wipe all data and recreate the schema."""
    print("Spendwise Reset Script")
    print("=" * 50)

    config = load_config()

    if not config.enable_reset:
        print("\nReset is disabled in configuration (enable_reset=false).")
        print(f"To enable reset, set enable_reset=true in {get_config_path()}")
        sys.exit(1)

    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")
    print(f"Archives: {config.archive_dir}")

    response = input("\nThis will delete ALL data. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    print("\nApplying migrations...")
    applied = Migrator(DatabaseManager(config)).apply_pending()
    for migration in applied:
        print(f"  ✓ {migration}")

    print("\n" + "=" * 50)
    print("Reset complete! Database has been recreated.")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    reset()
