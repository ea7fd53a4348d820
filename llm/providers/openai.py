"""OpenAI provider implementation for the chat advisor."""

from typing import Any, Dict, List, Optional
from openai import OpenAI
from llm.providers.base import AdvisorProvider
from logger import get_logger

logger = get_logger("llm")

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIProvider(AdvisorProvider):
    """OpenAI implementation using the chat completions API."""

    def __init__(self, api_key: str, model: Optional[str] = None, client=None):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key.
            model: Model to use (e.g., "gpt-4o-mini"). If None, uses the prompt default.
            client: Optional pre-built client (used by tests).
        """
        self.client = client or OpenAI(api_key=api_key)
        self.model = model

    def reply(
        self,
        system_prompt: str,
        history: List[Dict[str, str]],
        message: str,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send the briefing, history and message to OpenAI and return the reply text.

        Raises:
            Exception: If the OpenAI API call fails.
        """
        parameters = parameters or {}
        model = self.model or parameters.get("model", DEFAULT_MODEL)

        messages = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": m["role"], "content": m["content"]} for m in history)
        messages.append({"role": "user", "content": message})

        logger.info(
            f"Calling OpenAI model={model} history={len(history)} "
            f"briefing_chars={len(system_prompt)}"
        )

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=parameters.get("temperature", 0.3),
                max_tokens=parameters.get("max_tokens", 1024),
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        if not response.choices:
            logger.warning("OpenAI returned no choices")
            return ""

        content = response.choices[0].message.content
        text = content.strip() if isinstance(content, str) else ""
        logger.info(f"OpenAI reply received chars={len(text)}")
        return text
