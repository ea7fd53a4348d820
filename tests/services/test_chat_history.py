import pytest


class TestChatHistoryService:
    """Tests for ChatHistoryService."""

    def test_exchange_is_stored_in_order(self, services):
        services.chat_history.add_exchange("Can I buy a coffee?", "Yes, within your limit.")

        messages = services.chat_history.recent()

        assert [(m.role, m.content) for m in messages] == [
            ("user", "Can I buy a coffee?"),
            ("assistant", "Yes, within your limit."),
        ]

    def test_recent_returns_latest_oldest_first(self, services):
        for i in range(5):
            services.chat_history.add_exchange(f"q{i}", f"a{i}")

        messages = services.chat_history.recent(limit=3)

        assert [m.content for m in messages] == ["a3", "q4", "a4"]

    def test_rejects_unknown_role(self, services):
        with pytest.raises(ValueError):
            services.chat_history.add("system", "hidden")

    def test_clear(self, services):
        services.chat_history.add("user", "hello")

        assert services.chat_history.clear() == 1
        assert services.chat_history.recent() == []
