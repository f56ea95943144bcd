"""Domain models package."""

from safecall.domain.models.call_summary import CallSummary, format_duration
from safecall.domain.models.contact import EmergencyContact
from safecall.domain.models.message import Message
from safecall.domain.models.session import Session
from safecall.domain.models.session_event import SessionEvent

__all__ = [
    # Timeline
    "Message",
    # Session
    "Session",
    "SessionEvent",
    # Collaborator-facing
    "EmergencyContact",
    "CallSummary",
    "format_duration",
]
