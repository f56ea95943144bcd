"""
Virtual Timer Service

Deterministic timer service driven by an explicit clock.
Used by tests and replays: nothing fires until advance() is called.
"""

import heapq
import itertools
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from safecall.services.timing.timer_service import (
    TimerCallback,
    TimerService,
    new_timer_id,
)


@dataclass(order=True)
class _ScheduledTimer:
    """Heap entry. Ordered by due time, then schedule order."""

    due: float
    seq: int
    timer_id: str = field(compare=False)
    callback: TimerCallback = field(compare=False)
    interval: Optional[float] = field(default=None, compare=False)


class VirtualTimerService(TimerService):
    """
    Timer service on a virtual clock.

    Timers due at the same instant fire in the order they were
    scheduled. Periodic timers re-arm at due + interval before
    their callback runs, so a callback may cancel its own timer.

    Usage:
        timers = VirtualTimerService()
        timers.call_later(1.5, on_alert)
        timers.advance(2.0)
    """

    def __init__(self, start: Optional[datetime] = None) -> None:
        """
        Initialize virtual clock.

        Args:
            start: Wall-clock instant that virtual time 0 maps to
        """
        self._start = start or datetime.now(timezone.utc)
        self._elapsed = 0.0
        self._heap: list[_ScheduledTimer] = []
        self._active: dict[str, _ScheduledTimer] = {}
        self._seq = itertools.count()

    @property
    def elapsed(self) -> float:
        """Virtual seconds since the service was created."""
        return self._elapsed

    def now(self) -> datetime:
        return self._start + timedelta(seconds=self._elapsed)

    def call_later(self, delay: float, callback: TimerCallback, name: str = "") -> str:
        self._validate_delay(delay, periodic=False)
        return self._push(delay, callback, name, interval=None)

    def call_every(self, interval: float, callback: TimerCallback, name: str = "") -> str:
        self._validate_delay(interval, periodic=True)
        return self._push(interval, callback, name, interval=interval)

    def cancel(self, timer_id: str) -> bool:
        # Heap entry is left in place and skipped when popped
        return self._active.pop(timer_id, None) is not None

    @property
    def pending_count(self) -> int:
        return len(self._active)

    def pending_ids(self) -> list[str]:
        return list(self._active)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, firing every timer that falls due.

        Args:
            seconds: Virtual seconds to advance (>= 0)

        Returns:
            Number of callbacks run
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance by negative time: {seconds}")

        target = self._elapsed + seconds
        fired = 0

        while self._heap and self._heap[0].due <= target:
            entry = heapq.heappop(self._heap)
            if self._active.get(entry.timer_id) is not entry:
                continue

            self._elapsed = entry.due
            if entry.interval is None:
                del self._active[entry.timer_id]
            else:
                rearmed = replace(entry, due=entry.due + entry.interval, seq=next(self._seq))
                self._active[entry.timer_id] = rearmed
                heapq.heappush(self._heap, rearmed)

            entry.callback()
            fired += 1

        self._elapsed = target
        return fired

    def _push(
        self,
        delay: float,
        callback: TimerCallback,
        name: str,
        interval: Optional[float],
    ) -> str:
        timer_id = new_timer_id(name)
        entry = _ScheduledTimer(
            due=self._elapsed + delay,
            seq=next(self._seq),
            timer_id=timer_id,
            callback=callback,
            interval=interval,
        )
        self._active[timer_id] = entry
        heapq.heappush(self._heap, entry)
        return timer_id
