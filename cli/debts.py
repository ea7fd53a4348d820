#!/usr/bin/env python3

import sys
from datetime import date
from logger import get_logger
from models.money import parse_money
from tools.promo import promo_payoff

logger = get_logger()


def cmd_list(args, services):
    """List debts, with the promo countdown for promotional balances."""
    debts = services.debts.find_all()

    if not debts:
        logger.info("No debts found.")
        return

    today = date.today()
    logger.info("\nDebts:")
    logger.info("=" * 80)
    for debt in debts:
        balance = (
            f"${debt.current_balance:,.2f}" if debt.current_balance is not None else "unknown"
        )
        logger.info(f"ID: {debt.id}  {debt.name} ({debt.type})")
        logger.info(f"  Balance: {balance}  Payment: ${debt.monthly_payment:,.2f}/month")
        if debt.interest_rate is not None:
            logger.info(f"  Rate: {debt.interest_rate}%")

        payoff = promo_payoff(debt, today)
        if payoff:
            logger.info(
                f"  Promo ends {payoff.promo_end_date.isoformat()}: "
                f"{payoff.months_remaining} months left, "
                f"needs ${payoff.monthly_needed:,}/month "
                f"({'on track' if payoff.on_track else 'BEHIND'})"
            )
        if debt.notes:
            logger.info(f"  Notes: {debt.notes}")
        logger.info("-" * 80)

    logger.info(f"\nTotal debts: {len(debts)}")


def cmd_set(args, services):
    """Update balance, rate or payment of one debt."""
    fields = {}
    if args.balance is not None:
        fields["current_balance"] = args.balance
    if args.rate is not None:
        fields["interest_rate"] = args.rate
    if args.payment is not None:
        fields["monthly_payment"] = args.payment
    if args.promo_end is not None:
        fields["promo_end_date"] = args.promo_end

    if not fields:
        logger.error("Nothing to update; pass --balance, --rate, --payment or --promo-end.")
        sys.exit(1)

    try:
        updated = services.debts.update(args.debt_id, **fields)
    except ValueError as e:
        logger.error(f"Invalid value: {e}")
        sys.exit(1)

    if not updated:
        logger.error(f"Debt {args.debt_id} not found.")
        sys.exit(1)

    services.profile.touch_balance_update()
    logger.info(f"✓ Debt {args.debt_id} updated")


def setup_parser(subparsers):
    """Setup debts subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "debts",
        help="Manage debts",
        description="List debts and update balances",
    )

    debts_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available debt commands",
        dest="subcommand",
        required=True,
    )

    list_parser = debts_subparsers.add_parser("list", help="List all debts")
    list_parser.set_defaults(func=cmd_list)

    set_parser = debts_subparsers.add_parser("set", help="Update a debt")
    set_parser.add_argument("debt_id", type=int, help="Debt ID")
    set_parser.add_argument("--balance", type=parse_money, help="Current balance")
    set_parser.add_argument("--rate", type=parse_money, help="Interest rate (percent)")
    set_parser.add_argument("--payment", type=parse_money, help="Monthly payment")
    set_parser.add_argument(
        "--promo-end", dest="promo_end", help="Promo end date (YYYY-MM-DD)"
    )
    set_parser.set_defaults(func=cmd_set)
