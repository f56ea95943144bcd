"""
Unit Tests for Infrastructure Adapters

Tests the in-memory contact store, notification sinks,
call history and metrics rendering.
"""

import structlog.testing

from safecall.domain.models import CallSummary, EmergencyContact
from safecall.infrastructure.contacts import DEFAULT_CONTACTS, InMemoryContactStore
from safecall.infrastructure.history import InMemoryCallHistory
from safecall.infrastructure.metrics import render_metrics, track_alert, track_reply
from safecall.infrastructure.notifications import (
    InMemoryNotificationSink,
    LoggingNotificationSink,
)


class TestContactStore:
    """In-memory contact store."""

    def test_default_contacts(self) -> None:
        contacts = InMemoryContactStore().list_contacts()

        assert [c.name for c in contacts] == ["Mom", "Best Friend"]
        assert contacts[0].phone == "+1 (555) 123-4567"

    def test_snapshot_is_a_copy(self) -> None:
        store = InMemoryContactStore()
        store.list_contacts().clear()

        assert len(store.list_contacts()) == len(DEFAULT_CONTACTS)

    def test_replace(self) -> None:
        store = InMemoryContactStore()
        store.replace([EmergencyContact(id="3", name="Dad", phone="+1 (555) 222-3333")])

        assert [c.name for c in store.list_contacts()] == ["Dad"]


class TestNotificationSinks:
    """Notification sinks."""

    def test_in_memory_sink_keeps_order(self) -> None:
        sink = InMemoryNotificationSink()
        sink.notify("Recording started", "Your call is now being recorded")
        sink.notify("Recording saved", "Recording duration: 00:12")

        assert sink.titles() == ["Recording started", "Recording saved"]
        sink.clear()
        assert sink.notifications == []

    def test_logging_sink_logs_title_only(self) -> None:
        with structlog.testing.capture_logs() as logs:
            LoggingNotificationSink().notify(
                "Code word updated",
                'Your emergency code word is now: "bluebird"',
            )

        assert logs[0]["title"] == "Code word updated"
        assert "bluebird" not in repr(logs)


class TestCallHistory:
    """In-memory call history."""

    def test_newest_first(self) -> None:
        history = InMemoryCallHistory()
        history.record(CallSummary(duration_seconds=10, message_count=2, has_alerts=False))
        history.record(CallSummary(duration_seconds=125, message_count=7, has_alerts=True))

        assert len(history) == 2
        assert history.entries[0].summary.duration_seconds == 125
        assert history.entries[1].summary.duration_seconds == 10

    def test_entry_to_dict(self) -> None:
        history = InMemoryCallHistory()
        history.record(CallSummary(duration_seconds=5, message_count=1, has_alerts=False))

        data = history.entries[0].to_dict()
        assert data["duration_seconds"] == 5
        assert data["message_count"] == 1
        assert data["has_alerts"] is False
        assert "id" in data and "recorded_at" in data


class TestMetrics:
    """Prometheus metrics."""

    def test_render_includes_safecall_metrics(self) -> None:
        track_alert("code_word", sent=2, failed=0)
        track_reply("greeting")

        output = render_metrics().decode("utf-8")

        assert "safecall_alerts_dispatched_total" in output
        assert "safecall_contact_notifications_total" in output
        assert 'category="greeting"' in output
