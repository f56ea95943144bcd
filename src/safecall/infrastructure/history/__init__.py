"""Call history infrastructure package."""

from safecall.infrastructure.history.call_history import (
    CallHistoryEntry,
    CallHistorySink,
    InMemoryCallHistory,
)

__all__ = ["CallHistorySink", "CallHistoryEntry", "InMemoryCallHistory"]
