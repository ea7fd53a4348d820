#!/usr/bin/env python3

from llm.briefing import describe_promo
from logger import get_logger
from tools.snapshot import SnapshotAssembler

logger = get_logger()


def cmd_status(args, services):
    """Print the dashboard: daily limit, status and pay-period spending."""
    snapshot = SnapshotAssembler(services).build()
    period = snapshot.pay_period
    discretionary = snapshot.discretionary

    logger.info("=" * 80)
    logger.info(
        f"Daily limit: ${snapshot.daily_spending_limit}   "
        f"Status: {snapshot.spending_status.upper()}"
    )
    logger.info(
        f"Pay period {period.start_date.isoformat()} to {period.end_date.isoformat()} "
        f"(day {period.day_in_period} of {period.total_days}, "
        f"{period.days_remaining} left)"
    )
    logger.info("=" * 80)

    logger.info(f"{'Category':<20} {'Spent':>10} {'Budget':>10} {'Left':>10} {'Used':>6}")
    for row in discretionary.by_category:
        flag = "  OVER" if row.is_over else ""
        logger.info(
            f"{row.category:<20} {row.spent:>10,.2f} {row.budget:>10,.2f} "
            f"{row.remaining:>10,.2f} {row.percent_used:>5}%{flag}"
        )
    logger.info("-" * 80)
    logger.info(
        f"{'Total':<20} {discretionary.total_spent:>10,.2f} "
        f"{discretionary.total_budget:>10,.2f} {discretionary.remaining:>10,.2f}"
    )

    logger.info(f"\nCash: ${snapshot.total_cash:,.2f}   "
                f"Investments: ${snapshot.total_investments:,.2f}   "
                f"Card debt: ${snapshot.total_credit_card_debt:,.2f}")
    logger.info(f"Days until payday: {snapshot.days_until_payday}")

    for debt in snapshot.debts:
        block = describe_promo(debt, snapshot)
        if block:
            logger.info(f"\n{block}")


def setup_parser(subparsers):
    """Setup status command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "status",
        help="Show today's spending limit",
        description="Show the daily limit, status and pay-period spending",
    )
    parser.set_defaults(func=cmd_status)
