#!/usr/bin/env python3

import sys
from logger import get_logger
from models.money import parse_money

logger = get_logger()


def cmd_list(args, services):
    """List all accounts with their balances."""
    accounts = services.accounts.find_all()

    if not accounts:
        logger.info("No accounts found.")
        return

    logger.info("\nAccounts:")
    logger.info("=" * 80)
    for account in accounts:
        updated = account.last_updated.strftime("%Y-%m-%d") if account.last_updated else "never"
        logger.info(
            f"{account.id:>4}  {account.name:<30} {account.type:<11} "
            f"${account.balance:>12,.2f}  (updated {updated})"
        )

    logger.info(f"\nTotal accounts: {len(accounts)}")


def cmd_set_balance(args, services):
    """Record a new balance for one account."""
    account = services.accounts.update_balance(args.account_id, args.balance)
    if account is None:
        logger.error(f"Account {args.account_id} not found.")
        logger.info("Use 'spendwise accounts list' to see available accounts.")
        sys.exit(1)

    services.profile.touch_balance_update()
    logger.info(f"✓ {account.name} balance set to ${account.balance:,.2f}")


def setup_parser(subparsers):
    """Setup accounts subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "accounts",
        help="Manage accounts",
        description="List accounts and record balances",
    )

    accounts_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available account commands",
        dest="subcommand",
        required=True,
    )

    list_parser = accounts_subparsers.add_parser("list", help="List all accounts")
    list_parser.set_defaults(func=cmd_list)

    balance_parser = accounts_subparsers.add_parser(
        "set-balance", help="Set an account's current balance"
    )
    balance_parser.add_argument("account_id", type=int, help="Account ID")
    balance_parser.add_argument("balance", type=parse_money, help="New balance")
    balance_parser.set_defaults(func=cmd_set_balance)
