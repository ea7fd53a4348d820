#!/usr/bin/env python3

import sqlite3
import sys
from decimal import Decimal
from logger import get_logger
from models.money import parse_money
from tools.discretionary import DISCRETIONARY_CATEGORIES

logger = get_logger()


def cmd_list(args, services):
    """List the monthly budget and the per-period discretionary allowances."""
    categories = services.budget_categories.find_all()

    if not categories:
        logger.info("No budget categories found.")
    else:
        logger.info("\nMonthly budget:")
        logger.info("=" * 80)
        total = Decimal("0")
        for category in categories:
            flags = []
            if category.is_fixed:
                flags.append("fixed")
            if category.is_excluded:
                flags.append("excluded")
            else:
                total += category.monthly_budget
            suffix = f" [{', '.join(flags)}]" if flags else ""
            logger.info(f"  {category.name:<30} ${category.monthly_budget:>10,.2f}{suffix}")
        logger.info(f"\nTotal (excluding excluded): ${total:,.2f}")

    logger.info("\nDiscretionary allowances per pay period:")
    logger.info("=" * 80)
    for name, allowance in DISCRETIONARY_CATEGORIES.items():
        logger.info(
            f"  {name:<30} ${allowance.semi_monthly:>8,.2f}  (${allowance.monthly:,.2f}/month)"
        )


def cmd_create(args, services):
    """Add a monthly budget category."""
    try:
        category = services.budget_categories.create(
            args.name, args.amount, is_fixed=args.fixed, is_excluded=args.excluded
        )
    except sqlite3.IntegrityError:
        logger.error(f"Budget category '{args.name}' already exists.")
        sys.exit(1)

    logger.info(f"✓ Created budget category '{category.name}' (ID: {category.id})")


def setup_parser(subparsers):
    """Setup budget subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "budget",
        help="Manage budget categories",
        description="List and create monthly budget categories",
    )

    budget_subparsers = parser.add_subparsers(
        title="subcommands",
        dest="subcommand",
        required=True,
    )

    list_parser = budget_subparsers.add_parser("list", help="List budget categories")
    list_parser.set_defaults(func=cmd_list)

    create_parser = budget_subparsers.add_parser("create", help="Create a budget category")
    create_parser.add_argument("name", help="Category name, e.g. Groceries")
    create_parser.add_argument("amount", type=parse_money, help="Monthly budget")
    create_parser.add_argument(
        "--fixed", action="store_true", help="Committed cost such as rent or a loan"
    )
    create_parser.add_argument(
        "--excluded", action="store_true", help="Leave out of the operating budget"
    )
    create_parser.set_defaults(func=cmd_create)
