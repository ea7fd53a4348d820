from datetime import date
from decimal import Decimal

import pytest

from advisor import AdvisorError, ChatAdvisor
from db.manager import StorageError
from llm.providers.base import AdvisorProvider

TODAY = date(2025, 3, 10)


class FakeProvider(AdvisorProvider):
    def __init__(self, reply_text="Groceries are fine, skip the takeout.", error=None):
        self.reply_text = reply_text
        self.error = error
        self.calls = []

    def reply(self, system_prompt, history, message, parameters=None):
        self.calls.append(
            {"system_prompt": system_prompt, "history": history, "message": message}
        )
        if self.error:
            raise self.error
        return self.reply_text


class TestChatAdvisor:
    """Tests for ChatAdvisor.chat."""

    def test_reply_and_summary(self, services):
        services.accounts.create("Checking", "checking", Decimal("2100"))
        services.budget_categories.create("Rent", Decimal("3495"), is_fixed=True)
        provider = FakeProvider()

        reply = ChatAdvisor(services, provider).chat("Can I get takeout?", today=TODAY)

        assert reply.message == "Groceries are fine, skip the takeout."
        assert reply.total_savings == Decimal("2100.00")
        assert reply.budget_remaining == Decimal("3495.00")
        assert reply.days_until_payday == 5
        assert reply.to_dict()["snapshot"]["daysUntilPayday"] == 5
        assert "Daily spending limit: $" in provider.calls[0]["system_prompt"]

    def test_exchange_is_persisted_and_sent_as_history(self, services):
        provider = FakeProvider()
        advisor = ChatAdvisor(services, provider)

        advisor.chat("first", today=TODAY)
        advisor.chat("second", today=TODAY)

        assert provider.calls[1]["history"] == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "Groceries are fine, skip the takeout."},
        ]
        assert len(services.chat_history.recent()) == 4

    def test_history_is_limited_by_config(self, services):
        services.config.chat_history_limit = 2
        for i in range(3):
            services.chat_history.add_exchange(f"q{i}", f"a{i}")
        provider = FakeProvider()

        ChatAdvisor(services, provider).chat("next", today=TODAY)

        assert [m["content"] for m in provider.calls[0]["history"]] == ["q2", "a2"]

    @pytest.mark.parametrize("message", ["", "   ", None, 42])
    def test_rejects_empty_message(self, services, message):
        with pytest.raises(ValueError):
            ChatAdvisor(services, FakeProvider()).chat(message, today=TODAY)

        assert services.chat_history.recent() == []

    def test_provider_failure_keeps_user_message(self, services):
        provider = FakeProvider(error=RuntimeError("timeout"))

        with pytest.raises(AdvisorError, match="Failed to process chat"):
            ChatAdvisor(services, provider).chat("Can I buy shoes?", today=TODAY)

        messages = services.chat_history.recent()
        assert [(m.role, m.content) for m in messages] == [("user", "Can I buy shoes?")]

    def test_missing_provider_fails_the_same_way(self, services):
        with pytest.raises(AdvisorError):
            ChatAdvisor(services, None).chat("hello", today=TODAY)

        assert len(services.chat_history.recent()) == 1

    def test_storage_outage_still_reports_chat_failure(self, services, monkeypatch):
        """A failing history write must not mask the chat failure."""

        def broken(*args, **kwargs):
            raise StorageError("database is locked")

        monkeypatch.setattr(services.accounts, "find_all", broken)
        monkeypatch.setattr(services.chat_history, "add_many", broken)

        with pytest.raises(AdvisorError, match="Failed to process chat"):
            ChatAdvisor(services, FakeProvider()).chat("hello", today=TODAY)

    def test_failed_exchange_write_is_a_chat_failure(self, services, monkeypatch):
        def broken(*args, **kwargs):
            raise StorageError("disk I/O error")

        monkeypatch.setattr(services.chat_history, "add_many", broken)

        with pytest.raises(AdvisorError):
            ChatAdvisor(services, FakeProvider()).chat("hello", today=TODAY)
