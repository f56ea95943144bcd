"""Timer services package."""

from safecall.services.timing.asyncio_timer import AsyncioTimerService
from safecall.services.timing.timer_service import TimerCallback, TimerService
from safecall.services.timing.virtual_timer import VirtualTimerService

__all__ = [
    "TimerService",
    "TimerCallback",
    "VirtualTimerService",
    "AsyncioTimerService",
]
