"""
Call Session Domain Model

Holds the full state of one live call: the message timeline,
duration counters and UI flags. Mutated only by the call
session engine, through the methods below.

PRIVACY: code_word is the user's secret and must never be
logged or included in published events.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from safecall.domain.enums.call_enums import CallState, Sender
from safecall.domain.exceptions import InvalidTransitionError, SessionNotActiveError
from safecall.domain.models.call_summary import CallSummary
from safecall.domain.models.message import Message


# Flags that the user can flip directly
TOGGLEABLE_FLAGS: frozenset[str] = frozenset({
    "is_muted",
    "is_video_on",
    "voice_mode",
})


@dataclass
class Session:
    """
    Call session entity.

    Attributes:
        ai_name: Companion display name
        code_word: Active secret code word
        id: Unique session identifier
        state: Lifecycle state
        messages: Append-only, chronologically ordered timeline
        pending_input: Composer text not yet sent
        pending_code_word: Staged code word edit, committed on save
        call_duration_seconds: Completed call ticks
        recording_duration_seconds: Completed ticks of the current recording
        has_alerts: Set once any alert fires; never cleared
        started_at: When the call started
        ended_at: When the call ended
    """

    ai_name: str
    code_word: str
    id: str = field(default_factory=lambda: str(uuid4()))
    state: CallState = CallState.NOT_STARTED
    messages: list[Message] = field(default_factory=list)
    pending_input: str = ""
    pending_code_word: Optional[str] = None

    # Counters
    call_duration_seconds: int = 0
    recording_duration_seconds: int = 0

    # Flags
    is_muted: bool = False
    is_video_on: bool = False
    is_recording: bool = False
    is_typing: bool = False
    is_assistant_speaking: bool = False
    voice_mode: bool = True
    has_alerts: bool = False

    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.state == CallState.ACTIVE

    @property
    def message_count(self) -> int:
        """Get total timeline entries."""
        return len(self.messages)

    def require_active(self) -> None:
        """Raise unless the call is in progress."""
        if self.state != CallState.ACTIVE:
            raise SessionNotActiveError(self.id, self.state.value)

    def activate(self, now: datetime) -> None:
        """
        Start the call.

        Args:
            now: Session clock time
        """
        if self.state != CallState.NOT_STARTED:
            raise InvalidTransitionError(self.id, self.state.value, CallState.ACTIVE.value)
        self.state = CallState.ACTIVE
        self.started_at = now

    def end(self, now: datetime) -> CallSummary:
        """
        End the call and build its summary.

        Args:
            now: Session clock time

        Returns:
            The one summary of this call
        """
        if self.state != CallState.ACTIVE:
            raise InvalidTransitionError(self.id, self.state.value, CallState.ENDED.value)
        self.state = CallState.ENDED
        self.ended_at = now
        self.is_typing = False
        self.is_assistant_speaking = False
        self.is_recording = False
        return CallSummary(
            duration_seconds=self.call_duration_seconds,
            message_count=self.message_count,
            has_alerts=self.has_alerts,
        )

    def add_message(
        self,
        sender: Sender,
        text: str,
        timestamp: datetime,
        is_voice: bool = False,
    ) -> Message:
        """
        Append a message to the timeline.

        Timestamps earlier than the last entry are clamped to it,
        so the timeline stays non-decreasing.

        Args:
            sender: Message author
            text: Message content
            timestamp: Session clock time
            is_voice: Whether the message was spoken

        Returns:
            The created message
        """
        self.require_active()
        if self.messages and timestamp < self.messages[-1].timestamp:
            timestamp = self.messages[-1].timestamp
        message = Message(sender=sender, text=text, timestamp=timestamp, is_voice=is_voice)
        self.messages.append(message)
        return message

    def toggle(self, flag: str) -> bool:
        """
        Flip a user-controlled flag.

        Returns:
            The new flag value
        """
        self.require_active()
        if flag not in TOGGLEABLE_FLAGS:
            raise ValueError(f"Unknown toggleable flag: {flag}")
        value = not getattr(self, flag)
        setattr(self, flag, value)
        return value

    def set_typing(self, value: bool) -> None:
        self.require_active()
        self.is_typing = value

    def set_speaking(self, value: bool) -> None:
        self.require_active()
        self.is_assistant_speaking = value

    def set_pending_input(self, text: str) -> None:
        self.require_active()
        self.pending_input = text

    def mark_alerted(self) -> None:
        """Record that an alert fired. Monotonic."""
        self.require_active()
        self.has_alerts = True

    def tick_call(self) -> int:
        self.require_active()
        self.call_duration_seconds += 1
        return self.call_duration_seconds

    def start_recording(self) -> None:
        self.require_active()
        self.is_recording = True
        self.recording_duration_seconds = 0

    def tick_recording(self) -> int:
        self.require_active()
        self.recording_duration_seconds += 1
        return self.recording_duration_seconds

    def stop_recording(self) -> int:
        """
        Stop recording and reset the counter.

        Returns:
            Seconds recorded, observed before the reset
        """
        self.require_active()
        recorded = self.recording_duration_seconds
        self.is_recording = False
        self.recording_duration_seconds = 0
        return recorded

    def stage_code_word(self, value: str) -> None:
        self.require_active()
        self.pending_code_word = value

    def discard_code_word(self) -> None:
        self.require_active()
        self.pending_code_word = None

    def commit_code_word(self) -> bool:
        """
        Replace the active code word with the staged one.

        A blank staged value keeps the current code word.

        Returns:
            True if the code word changed
        """
        self.require_active()
        staged = self.pending_code_word
        self.pending_code_word = None
        if staged is None or not staged.strip():
            return False
        self.code_word = staged.strip()
        return True

    def to_dict(self) -> dict:
        """Serialize session for display (code word excluded)."""
        return {
            "id": self.id,
            "ai_name": self.ai_name,
            "state": self.state.value,
            "message_count": self.message_count,
            "call_duration_seconds": self.call_duration_seconds,
            "recording_duration_seconds": self.recording_duration_seconds,
            "is_muted": self.is_muted,
            "is_video_on": self.is_video_on,
            "is_recording": self.is_recording,
            "is_typing": self.is_typing,
            "is_assistant_speaking": self.is_assistant_speaking,
            "voice_mode": self.voice_mode,
            "has_alerts": self.has_alerts,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
        }
