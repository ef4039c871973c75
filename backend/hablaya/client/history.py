"""
Conversation Buffer

Recent-window message history owned by one session. The tutor system prompt
is never stored here; the chat relay builds it fresh every turn.
"""
import datetime as dt
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Iterator, List, Optional

ROLES = ("system", "user", "assistant")


def _now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


@dataclass(frozen=True)
class Message:
    """One chat message; immutable once appended"""
    role: str
    content: str
    timestamp: str = field(default_factory=_now_iso)
    metadata: Optional[Dict[str, Any]] = None  # {"isVoiceInput": bool, "mode": "voice"|"text"}

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Invalid message role: {self.role!r}")

    def to_payload(self) -> Dict[str, Any]:
        """JSON shape sent to the chat relay"""
        payload = {"role": self.role, "content": self.content, "timestamp": self.timestamp}
        if self.metadata:
            payload["metadata"] = dict(self.metadata)
        return payload


class ConversationHistory:
    """
    FIFO buffer capped at `limit` messages.

    Appending past the cap silently drops the oldest entries.
    """

    def __init__(self, limit: int = 10):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._messages: Deque[Message] = deque(maxlen=limit)

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def add(self, role: str, content: str, **metadata) -> Message:
        message = Message(role=role, content=content, metadata=metadata or None)
        self.append(message)
        return message

    def clear(self) -> None:
        self._messages.clear()

    def to_payload(self) -> List[Dict[str, Any]]:
        return [m.to_payload() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]
