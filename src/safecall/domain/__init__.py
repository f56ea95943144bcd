"""
SafeCall Domain Layer

Core entities and value objects of a live call session.
These models are independent of timers, sinks and stores.
"""

from safecall.domain.enums.call_enums import (
    AlertReason,
    CallState,
    Sender,
    SessionEventType,
)
from safecall.domain.exceptions import (
    InvalidTransitionError,
    SafeCallError,
    SessionNotActiveError,
)
from safecall.domain.models.call_summary import CallSummary, format_duration
from safecall.domain.models.contact import EmergencyContact
from safecall.domain.models.message import Message
from safecall.domain.models.session import Session
from safecall.domain.models.session_event import SessionEvent

__all__ = [
    # Session
    "Session",
    "Message",
    "SessionEvent",
    "CallSummary",
    "EmergencyContact",
    "format_duration",
    # Enums
    "AlertReason",
    "CallState",
    "Sender",
    "SessionEventType",
    # Errors
    "SafeCallError",
    "SessionNotActiveError",
    "InvalidTransitionError",
]
