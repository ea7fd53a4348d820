from dataclasses import dataclass
from datetime import datetime
from typing import Optional

CHAT_ROLES = ("user", "assistant")


@dataclass
class ChatMessage:
    id: int
    role: str  # "user" or "assistant"
    content: str
    created_at: Optional[datetime] = None

    def to_message(self) -> dict:
        """Role/content pair in the shape chat APIs expect."""
        return {"role": self.role, "content": self.content}
