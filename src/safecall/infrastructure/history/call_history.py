"""
Call History

Receives the summary of every finished call. The history store
owns summaries once recorded.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from safecall.domain.models.call_summary import CallSummary
from safecall.config.logging_config import get_logger

logger = get_logger(__name__)


class CallHistorySink(ABC):
    """Destination for call summaries."""

    @abstractmethod
    def record(self, summary: CallSummary) -> None:
        """Store a finished call's summary."""
        ...


@dataclass(frozen=True)
class CallHistoryEntry:
    """
    A stored call.

    Attributes:
        summary: The call's summary
        id: Entry identifier
        recorded_at: When the entry was stored
    """

    summary: CallSummary
    id: str = field(default_factory=lambda: str(uuid4()))
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "recorded_at": self.recorded_at.isoformat(),
            **self.summary.to_dict(),
        }


class InMemoryCallHistory(CallHistorySink):
    """In-memory history, newest call first."""

    def __init__(self) -> None:
        self._entries: list[CallHistoryEntry] = []

    def record(self, summary: CallSummary) -> None:
        entry = CallHistoryEntry(summary=summary)
        self._entries.insert(0, entry)
        logger.info(
            "Call recorded",
            entry_id=entry.id,
            duration_seconds=summary.duration_seconds,
            message_count=summary.message_count,
            has_alerts=summary.has_alerts,
        )

    @property
    def entries(self) -> list[CallHistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
