"""Tests configuration and fixtures."""

import random
from datetime import datetime, timezone

import pytest

from safecall.config import Settings
from safecall.domain.models.session_event import SessionEvent
from safecall.infrastructure.contacts import InMemoryContactStore
from safecall.infrastructure.history import InMemoryCallHistory
from safecall.infrastructure.notifications import InMemoryNotificationSink
from safecall.services.session import CallSessionEngine
from safecall.services.timing import VirtualTimerService


@pytest.fixture
def test_settings() -> Settings:
    """Settings with default companion and timing."""
    return Settings(env="development")


@pytest.fixture
def timers() -> VirtualTimerService:
    """Virtual clock starting at a fixed instant."""
    return VirtualTimerService(start=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def contact_store() -> InMemoryContactStore:
    """Default two demo contacts (Mom, Best Friend)."""
    return InMemoryContactStore()


@pytest.fixture
def notifier() -> InMemoryNotificationSink:
    return InMemoryNotificationSink()


@pytest.fixture
def history() -> InMemoryCallHistory:
    return InMemoryCallHistory()


@pytest.fixture
def engine(
    timers: VirtualTimerService,
    contact_store: InMemoryContactStore,
    notifier: InMemoryNotificationSink,
    history: InMemoryCallHistory,
    test_settings: Settings,
) -> CallSessionEngine:
    """Call session engine on the virtual clock, not yet started."""
    return CallSessionEngine(
        timers=timers,
        contact_store=contact_store,
        notifier=notifier,
        history=history,
        settings=test_settings,
        rng=random.Random(1234),
        code_word="pineapple",
    )


@pytest.fixture
def events(engine: CallSessionEngine) -> list[SessionEvent]:
    """Every event the engine publishes, in order."""
    received: list[SessionEvent] = []
    engine.subscribe(received.append)
    return received
