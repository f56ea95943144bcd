"""
Session Event Model

Events are how a call session exposes its state changes to a
UI or test harness without sharing mutable fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from safecall.domain.enums.call_enums import SessionEventType


@dataclass(frozen=True)
class SessionEvent:
    """
    A state change published by a call session.

    Attributes:
        type: What happened
        session_id: Session that published the event
        timestamp: Session clock time of the change
        payload: Event-specific data (never contains the code word)
    """

    type: SessionEventType
    session_id: str
    timestamp: datetime
    payload: dict[str, Any] = field(default_factory=dict)
