"""
Call Session Enumerations

Standardized values for message senders, session lifecycle,
alert reasons and the events a session publishes.
"""

from enum import StrEnum


class Sender(StrEnum):
    """Author of a timeline message."""

    USER = "user"
    ASSISTANT = "assistant"


class CallState(StrEnum):
    """
    Call session lifecycle states.

    NOT_STARTED -> ACTIVE -> ENDED. ENDED is terminal.
    """

    NOT_STARTED = "not_started"
    """Session created, call not yet started."""

    ACTIVE = "active"
    """Call in progress; timers running."""

    ENDED = "ended"
    """
    Call terminated and summary emitted.

    SAFETY_NOTE: No timer may fire or mutate state past this point.
    """


class AlertReason(StrEnum):
    """
    Why an alert was sent to emergency contacts.
    """

    CODE_WORD = "code_word"
    """The user's secret code word appeared in a message."""

    EMOTION_DETECTED = "emotion_detected"
    """A distress keyword appeared in a message."""

    @property
    def label(self) -> str:
        """Human-readable label included in contact notifications."""
        labels = {
            AlertReason.CODE_WORD: "Code word detected",
            AlertReason.EMOTION_DETECTED: "Distress detected",
        }
        return labels[self]


class SessionEventType(StrEnum):
    """Events published by a call session to its subscribers."""

    CALL_STARTED = "call_started"
    CALL_TICK = "call_tick"
    MESSAGE_APPENDED = "message_appended"
    INPUT_CHANGED = "input_changed"
    TYPING_CHANGED = "typing_changed"
    SPEAKING_CHANGED = "speaking_changed"
    FLAG_CHANGED = "flag_changed"
    ALERT_DISPATCHED = "alert_dispatched"
    RECORDING_STARTED = "recording_started"
    RECORDING_TICK = "recording_tick"
    RECORDING_SAVED = "recording_saved"
    CODE_WORD_STAGED = "code_word_staged"
    CODE_WORD_UPDATED = "code_word_updated"
    CALL_ENDED = "call_ended"
