#!/usr/bin/env python3
"""
Spendwise CLI - household budget dashboard and spending advisor.

Usage:
    spendwise <command> [subcommand] [options]

Commands:
    accounts     List accounts and record balances
    debts        List debts and update balances
    goals        List goals and record progress
    budget       Monthly budget categories
    profile      Household profile
    transactions Import and list transactions
    status       Today's spending limit and status
    chat         Talk to the advisor
    serve        Run the HTTP API
    migrate      Database migrations

Examples:
    spendwise migrate apply
    spendwise transactions import export.csv
    spendwise accounts set-balance 1 4250.00
    spendwise status
"""

import sys
import argparse
from cli import (
    accounts,
    budget,
    chat,
    debts,
    goals,
    migrate,
    profile,
    serve,
    status,
    transactions,
)
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="spendwise",
        description="Spendwise - how much can I spend today?",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    for command in (
        accounts,
        debts,
        goals,
        budget,
        profile,
        transactions,
        status,
        chat,
        serve,
        migrate,
    ):
        command.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config, console=getattr(args, "console_logging", True))
            services = Services(config)
            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
