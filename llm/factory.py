"""Factory for creating advisor provider instances."""

from typing import Optional
from config import Config
from llm.providers.base import AdvisorProvider
from llm.providers.openai import OpenAIProvider
from logger import get_logger

logger = get_logger("llm")


def get_advisor_provider(config: Config) -> Optional[AdvisorProvider]:
    """Create an advisor provider instance based on configuration.

    Args:
        config: Application configuration.

    Returns:
        AdvisorProvider instance, or None if the LLM is disabled.

    Raises:
        ValueError: If provider is configured but settings are invalid.
    """
    if not config.llm_enabled:
        logger.info("LLM advisor is disabled")
        return None

    provider_name = config.llm_provider

    if provider_name == "openai":
        if not config.llm_openai_api_key:
            raise ValueError(
                "OpenAI provider selected but no API key configured "
                "(set llm.openai.api_key or OPENAI_API_KEY)"
            )

        model = config.llm_openai_model
        logger.info(f"Initializing OpenAI provider (model: {model or 'default'})")

        return OpenAIProvider(api_key=config.llm_openai_api_key, model=model)

    elif not provider_name:
        logger.info("No LLM provider configured")
        return None

    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
