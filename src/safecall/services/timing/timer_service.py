"""
Timer Service Interface

Cancelable delayed and periodic tasks used by a call session:
call duration, recording duration, the distress-alert delay,
the "thinking" delay and the "speaking" window.

ARCHITECTURE: Timers are identified by opaque ids returned at
schedule time. Owners keep their ids and cancel them explicitly;
nothing is tied to a UI lifecycle.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable
from uuid import uuid4

TimerCallback = Callable[[], None]


def new_timer_id(name: str = "") -> str:
    """Build an opaque timer id, prefixed with a readable name."""
    prefix = name or "timer"
    return f"{prefix}-{uuid4().hex[:12]}"


class TimerService(ABC):
    """
    Abstract timer service.

    Implementations run every callback on a single logical thread;
    callbacks never run concurrently with each other.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Current time on this service's clock (timezone-aware UTC)."""
        ...

    @abstractmethod
    def call_later(self, delay: float, callback: TimerCallback, name: str = "") -> str:
        """
        Run callback once after delay seconds.

        Args:
            delay: Seconds to wait (>= 0)
            callback: Zero-argument callable
            name: Readable prefix for the timer id

        Returns:
            Timer id usable with cancel()
        """
        ...

    @abstractmethod
    def call_every(self, interval: float, callback: TimerCallback, name: str = "") -> str:
        """
        Run callback every interval seconds, first run one interval from now.

        Args:
            interval: Period in seconds (> 0)
            callback: Zero-argument callable
            name: Readable prefix for the timer id

        Returns:
            Timer id usable with cancel()
        """
        ...

    @abstractmethod
    def cancel(self, timer_id: str) -> bool:
        """
        Cancel a pending timer.

        Returns:
            True if the timer was pending and is now cancelled
        """
        ...

    @property
    @abstractmethod
    def pending_count(self) -> int:
        """Number of timers that may still fire."""
        ...

    def cancel_all(self) -> int:
        """
        Cancel every pending timer on this service.

        Returns:
            Number of timers cancelled
        """
        return sum(1 for timer_id in self.pending_ids() if self.cancel(timer_id))

    @abstractmethod
    def pending_ids(self) -> list[str]:
        """Ids of timers that may still fire."""
        ...

    @staticmethod
    def _validate_delay(delay: float, periodic: bool) -> None:
        if periodic and delay <= 0:
            raise ValueError(f"Interval must be positive, got {delay}")
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
