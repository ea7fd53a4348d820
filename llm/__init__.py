"""LLM integration for the chat advisor."""

from llm.factory import get_advisor_provider

__all__ = ["get_advisor_provider"]
