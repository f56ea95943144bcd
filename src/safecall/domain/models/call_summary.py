"""
Call Summary Domain Model

Produced exactly once per call, when the call ends, and handed
to the call-history store.
"""

from dataclasses import dataclass


def format_duration(seconds: int) -> str:
    """
    Format a second count as MM:SS.

    Minutes are not wrapped into hours, so 3725 seconds renders
    as "62:05".
    """
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass(frozen=True)
class CallSummary:
    """
    Immutable end-of-call record.

    Attributes:
        duration_seconds: Completed 1 Hz ticks since the call started
        message_count: Timeline entries at call end
        has_alerts: Whether any alert fired during the call
    """

    duration_seconds: int
    message_count: int
    has_alerts: bool

    def __post_init__(self) -> None:
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds must be >= 0, got {self.duration_seconds}")
        if self.message_count < 0:
            raise ValueError(f"message_count must be >= 0, got {self.message_count}")

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.duration_seconds)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "duration_seconds": self.duration_seconds,
            "message_count": self.message_count,
            "has_alerts": self.has_alerts,
        }
