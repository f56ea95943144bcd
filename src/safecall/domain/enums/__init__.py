"""Domain enums package."""

from safecall.domain.enums.call_enums import (
    AlertReason,
    CallState,
    Sender,
    SessionEventType,
)

__all__ = ["AlertReason", "CallState", "Sender", "SessionEventType"]
