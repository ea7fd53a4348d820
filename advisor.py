"""Chat advisor: one conversational turn against the current finances."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from llm.briefing import BriefingRenderer
from llm.providers.base import AdvisorProvider
from logger import get_logger
from tools.snapshot import SnapshotAssembler

logger = get_logger("advisor")


class AdvisorError(Exception):
    """Raised when a chat turn cannot produce a reply."""


@dataclass
class ChatReply:
    message: str
    total_savings: Decimal
    budget_remaining: Decimal
    days_until_payday: int

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "snapshot": {
                "totalSavings": float(self.total_savings),
                "budgetRemaining": float(self.budget_remaining),
                "daysUntilPayday": self.days_until_payday,
            },
        }


class ChatAdvisor:
    """Relays a user message, with a fresh briefing, to the advisor provider.

    Args:
        services: Services container.
        provider: AdvisorProvider, or None when the LLM is disabled.
        renderer: Briefing renderer; a default one if None.
        assembler: Snapshot assembler; a default one if None.
    """

    def __init__(
        self,
        services,
        provider: Optional[AdvisorProvider],
        renderer: Optional[BriefingRenderer] = None,
        assembler: Optional[SnapshotAssembler] = None,
    ):
        self.services = services
        self.provider = provider
        self.renderer = renderer or BriefingRenderer()
        self.assembler = assembler or SnapshotAssembler(services)

    def chat(self, message: str, today: Optional[date] = None) -> ChatReply:
        """Answer one message.

        The user message and the reply are stored together. If no reply can
        be produced the user message is stored on its own.

        Args:
            message: The user's message.
            today: Reference date for the snapshot; today if None.

        Returns:
            ChatReply with the reply text and a small snapshot summary.

        Raises:
            ValueError: If the message is empty.
            AdvisorError: If the snapshot, briefing or provider call fails.
        """
        if not isinstance(message, str) or not message.strip():
            raise ValueError("Message is required")

        try:
            snapshot = self.assembler.build(today)
            briefing = self.renderer.render(snapshot)
            history = [
                m.to_message()
                for m in self.services.chat_history.recent(
                    self.services.config.chat_history_limit
                )
            ]

            if self.provider is None:
                raise AdvisorError("No advisor provider configured")

            reply = self.provider.reply(
                briefing["system_prompt"], history, message, briefing["parameters"]
            )
        except Exception as e:
            logger.error(f"Chat failed: {e}")
            self._keep_user_message(message)
            raise AdvisorError("Failed to process chat") from e

        try:
            self.services.chat_history.add_exchange(message, reply)
        except Exception as e:
            logger.error(f"Could not store chat exchange: {e}")
            raise AdvisorError("Failed to process chat") from e
        logger.info(f"Chat reply sent ({len(reply)} chars, {len(history)} prior messages)")

        return ChatReply(
            message=reply,
            total_savings=snapshot.total_savings,
            budget_remaining=snapshot.current_month.budget_remaining,
            days_until_payday=snapshot.days_until_payday,
        )

    def _keep_user_message(self, message: str) -> None:
        # Best effort; the storage failure may be why the turn failed
        try:
            self.services.chat_history.add("user", message)
        except Exception as e:
            logger.error(f"Could not store user message: {e}")
