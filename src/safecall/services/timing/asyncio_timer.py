"""
Asyncio Timer Service

Timer service backed by the asyncio event loop, for running a
call session in real time.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from safecall.services.timing.timer_service import (
    TimerCallback,
    TimerService,
    new_timer_id,
)


class AsyncioTimerService(TimerService):
    """
    Timer service using loop.call_later.

    Must be used from the thread running the event loop. When no
    loop is given, the running loop is looked up at schedule time.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._handles: dict[str, asyncio.TimerHandle] = {}

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def call_later(self, delay: float, callback: TimerCallback, name: str = "") -> str:
        self._validate_delay(delay, periodic=False)
        timer_id = new_timer_id(name)

        def fire() -> None:
            if self._handles.pop(timer_id, None) is None:
                return
            callback()

        self._handles[timer_id] = self._get_loop().call_later(delay, fire)
        return timer_id

    def call_every(self, interval: float, callback: TimerCallback, name: str = "") -> str:
        self._validate_delay(interval, periodic=True)
        timer_id = new_timer_id(name)
        loop = self._get_loop()

        def fire() -> None:
            if timer_id not in self._handles:
                return
            self._handles[timer_id] = loop.call_later(interval, fire)
            callback()

        self._handles[timer_id] = loop.call_later(interval, fire)
        return timer_id

    def cancel(self, timer_id: str) -> bool:
        handle = self._handles.pop(timer_id, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    @property
    def pending_count(self) -> int:
        return len(self._handles)

    def pending_ids(self) -> list[str]:
        return list(self._handles)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()
