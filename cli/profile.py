#!/usr/bin/env python3

import sys
from logger import get_logger
from models.money import parse_money

logger = get_logger()


def cmd_show(args, services):
    """Show the household profile."""
    profile = services.profile.get()

    def stamp(value):
        return value.strftime("%Y-%m-%d %H:%M") if value else "never"

    logger.info(f"Name: {profile.name}")
    logger.info(f"Net monthly income: ${profile.net_monthly_income:,.2f}")
    logger.info(f"Pay schedule: {profile.pay_schedule}")
    logger.info(f"Onboarding complete: {'yes' if profile.onboarding_complete else 'no'}")
    logger.info(f"Last balance update: {stamp(profile.last_balance_update)}")
    logger.info(f"Last transaction import: {stamp(profile.last_transaction_import)}")


def cmd_set(args, services):
    """Update name, income or pay schedule."""
    if args.name is None and args.income is None and args.pay_schedule is None:
        logger.error("Nothing to update; pass --name, --income or --pay-schedule.")
        sys.exit(1)

    profile = services.profile.save(
        name=args.name, net_monthly_income=args.income, pay_schedule=args.pay_schedule
    )
    logger.info(f"✓ Profile saved for {profile.name}")


def setup_parser(subparsers):
    """Setup profile subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "profile",
        help="Household profile",
        description="Show or update the household profile",
    )

    profile_subparsers = parser.add_subparsers(
        title="subcommands",
        dest="subcommand",
        required=True,
    )

    profile_subparsers.add_parser("show", help="Show the profile").set_defaults(
        func=cmd_show
    )

    set_parser = profile_subparsers.add_parser("set", help="Update the profile")
    set_parser.add_argument("--name", help="Name the advisor uses")
    set_parser.add_argument("--income", type=parse_money, help="Net monthly income")
    set_parser.add_argument("--pay-schedule", dest="pay_schedule", help="Pay schedule label")
    set_parser.set_defaults(func=cmd_set)
