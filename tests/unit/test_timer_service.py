"""
Unit Tests for Timer Services

Tests the virtual clock used for deterministic replays and the
asyncio-backed service used at runtime.
"""

import asyncio

import pytest

from safecall.services.timing import AsyncioTimerService, VirtualTimerService


class TestVirtualTimerService:
    """Test suite for VirtualTimerService."""

    @pytest.fixture
    def timers(self) -> VirtualTimerService:
        return VirtualTimerService()

    def test_one_shot_fires_at_due_time(self, timers: VirtualTimerService) -> None:
        fired: list[float] = []
        timers.call_later(1.5, lambda: fired.append(timers.elapsed))

        timers.advance(1.4)
        assert fired == []

        timers.advance(0.1)
        assert fired == [1.5]
        assert timers.pending_count == 0

    def test_same_due_time_fires_in_schedule_order(self, timers: VirtualTimerService) -> None:
        order: list[str] = []
        timers.call_later(1.0, lambda: order.append("first"))
        timers.call_later(1.0, lambda: order.append("second"))
        timers.call_later(0.5, lambda: order.append("earliest"))

        timers.advance(2.0)

        assert order == ["earliest", "first", "second"]

    def test_periodic_timer_rearms(self, timers: VirtualTimerService) -> None:
        ticks: list[float] = []
        timers.call_every(1.0, lambda: ticks.append(timers.elapsed))

        timers.advance(3.5)

        assert ticks == [1.0, 2.0, 3.0]
        assert timers.pending_count == 1

    def test_cancel_prevents_firing(self, timers: VirtualTimerService) -> None:
        fired: list[int] = []
        timer_id = timers.call_later(1.0, lambda: fired.append(1))

        assert timers.cancel(timer_id) is True
        assert timers.cancel(timer_id) is False

        timers.advance(5.0)
        assert fired == []

    def test_periodic_can_cancel_itself(self, timers: VirtualTimerService) -> None:
        ticks: list[int] = []

        def tick() -> None:
            ticks.append(1)
            if len(ticks) == 2:
                timers.cancel(timer_id)

        timer_id = timers.call_every(1.0, tick)
        timers.advance(10.0)

        assert len(ticks) == 2
        assert timers.pending_count == 0

    def test_cancel_all(self, timers: VirtualTimerService) -> None:
        timers.call_later(1.0, lambda: None)
        timers.call_every(1.0, lambda: None)

        assert timers.cancel_all() == 2
        assert timers.advance(5.0) == 0

    def test_now_follows_virtual_clock(self, timers: VirtualTimerService) -> None:
        start = timers.now()
        timers.advance(90.0)
        assert (timers.now() - start).total_seconds() == 90.0

    def test_invalid_delays_rejected(self, timers: VirtualTimerService) -> None:
        with pytest.raises(ValueError):
            timers.call_later(-1.0, lambda: None)
        with pytest.raises(ValueError):
            timers.call_every(0.0, lambda: None)
        with pytest.raises(ValueError):
            timers.advance(-0.5)

    def test_timer_ids_carry_name(self, timers: VirtualTimerService) -> None:
        timer_id = timers.call_later(1.0, lambda: None, name="thinking")
        assert timer_id.startswith("thinking-")
        assert timer_id in timers.pending_ids()


class TestAsyncioTimerService:
    """Test suite for AsyncioTimerService."""

    @pytest.mark.asyncio
    async def test_call_later_fires(self) -> None:
        timers = AsyncioTimerService()
        fired: list[int] = []

        timers.call_later(0.01, lambda: fired.append(1))
        await asyncio.sleep(0.05)

        assert fired == [1]
        assert timers.pending_count == 0

    @pytest.mark.asyncio
    async def test_cancel_prevents_firing(self) -> None:
        timers = AsyncioTimerService()
        fired: list[int] = []

        timer_id = timers.call_later(0.01, lambda: fired.append(1))
        assert timers.cancel(timer_id) is True
        await asyncio.sleep(0.03)

        assert fired == []

    @pytest.mark.asyncio
    async def test_call_every_repeats_until_cancelled(self) -> None:
        timers = AsyncioTimerService()
        ticks: list[int] = []

        timer_id = timers.call_every(0.01, lambda: ticks.append(1))
        await asyncio.sleep(0.08)
        timers.cancel(timer_id)
        count_at_cancel = len(ticks)
        await asyncio.sleep(0.03)

        assert count_at_cancel >= 2
        assert len(ticks) == count_at_cancel
        assert timers.pending_count == 0
