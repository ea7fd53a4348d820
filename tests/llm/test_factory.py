import pytest

from llm import get_advisor_provider
from llm.providers.openai import OpenAIProvider


class TestGetAdvisorProvider:
    """Tests for get_advisor_provider."""

    def test_disabled_returns_none(self, test_config):
        assert get_advisor_provider(test_config) is None

    def test_openai_without_key_raises(self, test_config):
        test_config.llm_enabled = True

        with pytest.raises(ValueError):
            get_advisor_provider(test_config)

    def test_openai_with_key(self, test_config):
        test_config.llm_enabled = True
        test_config.llm_openai_api_key = "sk-test"

        provider = get_advisor_provider(test_config)

        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o-mini"

    def test_unknown_provider_raises(self, test_config):
        test_config.llm_enabled = True
        test_config.llm_provider = "ollama"

        with pytest.raises(ValueError):
            get_advisor_provider(test_config)

    def test_blank_provider_returns_none(self, test_config):
        test_config.llm_enabled = True
        test_config.llm_provider = ""

        assert get_advisor_provider(test_config) is None
