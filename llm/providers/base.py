"""Base provider interface for the chat advisor."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class AdvisorProvider(ABC):
    """Abstract base class for hosted text generators behind the advisor.

    Providers are opaque text-in/text-out: they receive the rendered briefing,
    the prior conversation and the new message, and return one reply.
    """

    @abstractmethod
    def reply(
        self,
        system_prompt: str,
        history: List[Dict[str, str]],
        message: str,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate the advisor's reply.

        Args:
            system_prompt: The rendered advisor briefing.
            history: Prior messages as {"role", "content"} dicts, oldest first.
            message: The new user message.
            parameters: Optional model parameters (model, temperature, max_tokens).

        Returns:
            The reply text; empty if the provider returned no text.

        Raises:
            Exception: If the provider API call fails.
        """
        pass
