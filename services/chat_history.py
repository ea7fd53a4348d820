"""Chat history service for database operations."""

from datetime import datetime
from typing import List
from models.chat_message import ChatMessage, CHAT_ROLES


class ChatHistoryService:
    """Service for storing the advisor conversation."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def recent(self, limit: int = 20) -> List[ChatMessage]:
        """Get the most recent messages, oldest first.

        Args:
            limit: Maximum number of messages to return.

        Returns:
            List of ChatMessage objects in conversation order.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, role, content, created_at FROM (
                    SELECT id, role, content, created_at
                    FROM chat_history
                    ORDER BY id DESC
                    LIMIT ?
                ) ORDER BY id
                """,
                (limit,),
            )
            return [self._row_to_message(row) for row in cursor.fetchall()]

    def add_exchange(self, user_message: str, assistant_message: str) -> None:
        """Persist a user message and the reply to it as a pair."""
        self.add_many([("user", user_message), ("assistant", assistant_message)])

    def add(self, role: str, content: str) -> None:
        """Persist a single message."""
        self.add_many([(role, content)])

    def add_many(self, messages: List[tuple]) -> None:
        """Persist (role, content) pairs in order.

        Raises:
            ValueError: If a role is not "user" or "assistant".
        """
        for role, _ in messages:
            if role not in CHAT_ROLES:
                raise ValueError(f"Unknown chat role: {role}")

        with self.db_manager.connect() as conn:
            conn.executemany(
                "INSERT INTO chat_history (role, content) VALUES (?, ?)", messages
            )
            conn.commit()

    def clear(self) -> int:
        """Delete the whole conversation. Returns the number of messages removed."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM chat_history")
            conn.commit()
            return cursor.rowcount

    def _row_to_message(self, row: tuple) -> ChatMessage:
        return ChatMessage(
            id=row[0],
            role=row[1],
            content=row[2],
            created_at=datetime.fromisoformat(row[3]) if row[3] else None,
        )
