#!/usr/bin/env python3

from advisor import AdvisorError, ChatAdvisor
from llm import get_advisor_provider
from logger import get_logger

logger = get_logger()

EXIT_WORDS = ("exit", "quit")


def cmd_chat(args, services):
    """Talk to the advisor until the user types exit or sends EOF."""
    advisor = ChatAdvisor(services, get_advisor_provider(services.config))

    print("Spendwise advisor. Type 'exit' to leave.")
    while True:
        try:
            message = input("\nyou> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not message:
            continue
        if message.lower() in EXIT_WORDS:
            break

        try:
            reply = advisor.chat(message)
        except AdvisorError as e:
            print(f"advisor> {e}. Check the log for details.")
            continue

        print(f"advisor> {reply.message}")


def setup_parser(subparsers):
    """Setup chat command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "chat",
        help="Chat with the advisor",
        description="Interactive chat with the spending advisor",
    )
    parser.set_defaults(func=cmd_chat, console_logging=False)
