#!/usr/bin/env python3

import sys
from logger import get_logger
from models.money import parse_money

logger = get_logger()


def cmd_list(args, services):
    """List goals in priority order."""
    goals = services.goals.find_all()

    if not goals:
        logger.info("No goals found.")
        return

    logger.info("\nGoals:")
    logger.info("=" * 80)
    for goal in goals:
        logger.info(
            f"{goal.priority}. {goal.name} (ID: {goal.id}): "
            f"${goal.current_amount:,.2f} / ${goal.target_amount:,.2f} "
            f"({goal.percent_complete}%)"
        )


def cmd_set_progress(args, services):
    """Record how much has been saved toward a goal."""
    if not services.goals.update_progress(args.goal_id, args.amount):
        logger.error(f"Goal {args.goal_id} not found.")
        sys.exit(1)

    goal = services.goals.find(args.goal_id)
    logger.info(f"✓ {goal.name}: {goal.percent_complete}% complete")


def setup_parser(subparsers):
    """Setup goals subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "goals",
        help="Manage savings goals",
        description="List goals and record progress",
    )

    goals_subparsers = parser.add_subparsers(
        title="subcommands",
        dest="subcommand",
        required=True,
    )

    list_parser = goals_subparsers.add_parser("list", help="List all goals")
    list_parser.set_defaults(func=cmd_list)

    progress_parser = goals_subparsers.add_parser(
        "set-progress", help="Set the amount saved toward a goal"
    )
    progress_parser.add_argument("goal_id", type=int, help="Goal ID")
    progress_parser.add_argument("amount", type=parse_money, help="Amount saved so far")
    progress_parser.set_defaults(func=cmd_set_progress)
