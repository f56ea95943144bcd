"""
Message Domain Model

A single entry in the call timeline, written by either the
user or the assistant.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from safecall.domain.enums.call_enums import Sender


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """
    Immutable timeline message.

    Attributes:
        sender: Message author (user/assistant)
        text: Message text content
        timestamp: When message was created
        is_voice: Whether the message was spoken rather than typed
        id: Opaque unique message identifier
    """

    sender: Sender
    text: str
    timestamp: datetime = field(default_factory=_utcnow)
    is_voice: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def is_from_user(self) -> bool:
        return self.sender == Sender.USER

    def to_dict(self) -> dict:
        """Serialize message to dictionary."""
        return {
            "id": self.id,
            "sender": self.sender.value,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "is_voice": self.is_voice,
        }
