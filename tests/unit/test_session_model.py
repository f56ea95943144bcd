"""
Unit Tests for Session Domain Models

Tests lifecycle transitions, timeline ordering, counters
and the code word edit flow.
"""

from datetime import datetime, timedelta, timezone

import pytest

from safecall.domain.enums.call_enums import CallState, Sender
from safecall.domain.exceptions import InvalidTransitionError, SessionNotActiveError
from safecall.domain.models import CallSummary, Session, format_duration


T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def session() -> Session:
    s = Session(ai_name="Alex", code_word="pineapple")
    s.activate(T0)
    return s


class TestLifecycle:
    """State transitions."""

    def test_new_session_not_started(self) -> None:
        s = Session(ai_name="Alex", code_word="pineapple")
        assert s.state == CallState.NOT_STARTED
        assert not s.is_active
        with pytest.raises(SessionNotActiveError):
            s.add_message(Sender.USER, "hi", T0)

    def test_activate_once(self, session: Session) -> None:
        assert session.is_active
        assert session.started_at == T0
        with pytest.raises(InvalidTransitionError):
            session.activate(T0)

    def test_end_builds_summary(self, session: Session) -> None:
        session.add_message(Sender.ASSISTANT, "Hey!", T0)
        session.tick_call()
        session.tick_call()
        session.mark_alerted()

        summary = session.end(T0 + timedelta(seconds=2))

        assert summary == CallSummary(duration_seconds=2, message_count=1, has_alerts=True)
        assert session.state == CallState.ENDED
        assert session.ended_at == T0 + timedelta(seconds=2)

    def test_end_clears_transient_flags(self, session: Session) -> None:
        session.set_typing(True)
        session.set_speaking(True)
        session.start_recording()

        session.end(T0)

        assert not session.is_typing
        assert not session.is_assistant_speaking
        assert not session.is_recording

    def test_ended_session_rejects_mutation(self, session: Session) -> None:
        session.end(T0)

        with pytest.raises(SessionNotActiveError):
            session.add_message(Sender.USER, "hello", T0)
        with pytest.raises(SessionNotActiveError):
            session.tick_call()
        with pytest.raises(InvalidTransitionError):
            session.end(T0)

    def test_ended_session_still_readable(self, session: Session) -> None:
        session.add_message(Sender.ASSISTANT, "Hey!", T0)
        session.end(T0)

        data = session.to_dict()
        assert data["state"] == "ended"
        assert data["message_count"] == 1


class TestTimeline:
    """Message ordering."""

    def test_messages_in_append_order(self, session: Session) -> None:
        session.add_message(Sender.ASSISTANT, "Hey!", T0, is_voice=True)
        session.add_message(Sender.USER, "hello", T0 + timedelta(seconds=1))

        assert [m.text for m in session.messages] == ["Hey!", "hello"]
        assert session.messages[0].is_voice
        assert session.messages[1].is_from_user

    def test_earlier_timestamp_clamped(self, session: Session) -> None:
        session.add_message(Sender.USER, "first", T0 + timedelta(seconds=5))
        late = session.add_message(Sender.ASSISTANT, "second", T0)

        assert late.timestamp == T0 + timedelta(seconds=5)

    def test_message_ids_unique(self, session: Session) -> None:
        a = session.add_message(Sender.USER, "same", T0)
        b = session.add_message(Sender.USER, "same", T0)
        assert a.id != b.id


class TestFlagsAndCounters:
    """Toggles and duration counters."""

    def test_toggle_flags(self, session: Session) -> None:
        assert session.toggle("is_muted") is True
        assert session.toggle("is_muted") is False
        assert session.toggle("is_video_on") is True
        assert session.toggle("voice_mode") is False

    def test_toggle_unknown_flag(self, session: Session) -> None:
        with pytest.raises(ValueError):
            session.toggle("has_alerts")

    def test_alert_flag_is_monotonic(self, session: Session) -> None:
        session.mark_alerted()
        session.mark_alerted()
        assert session.has_alerts

    def test_recording_counter_resets_on_stop(self, session: Session) -> None:
        session.start_recording()
        for _ in range(12):
            session.tick_recording()

        assert session.stop_recording() == 12
        assert session.recording_duration_seconds == 0
        assert not session.is_recording

    def test_recording_restart_starts_from_zero(self, session: Session) -> None:
        session.start_recording()
        session.tick_recording()
        session.stop_recording()
        session.start_recording()

        assert session.tick_recording() == 1


class TestCodeWord:
    """Staged code word edits."""

    def test_commit_replaces_code_word(self, session: Session) -> None:
        session.stage_code_word("  mango ")

        assert session.code_word == "pineapple"
        assert session.commit_code_word() is True
        assert session.code_word == "mango"
        assert session.pending_code_word is None

    def test_blank_commit_keeps_current(self, session: Session) -> None:
        session.stage_code_word("   ")

        assert session.commit_code_word() is False
        assert session.code_word == "pineapple"

    def test_discard(self, session: Session) -> None:
        session.stage_code_word("mango")
        session.discard_code_word()

        assert session.commit_code_word() is False
        assert session.code_word == "pineapple"

    def test_code_word_not_serialized(self, session: Session) -> None:
        assert "pineapple" not in str(session.to_dict())


class TestCallSummary:
    """Call summary and duration formatting."""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00"),
        (12, "00:12"),
        (125, "02:05"),
        (3725, "62:05"),
    ])
    def test_format_duration(self, seconds: int, expected: str) -> None:
        assert format_duration(seconds) == expected

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValueError):
            CallSummary(duration_seconds=-1, message_count=0, has_alerts=False)
        with pytest.raises(ValueError):
            CallSummary(duration_seconds=0, message_count=-1, has_alerts=False)

    def test_to_dict(self) -> None:
        summary = CallSummary(duration_seconds=125, message_count=7, has_alerts=True)

        assert summary.formatted_duration == "02:05"
        assert summary.to_dict() == {
            "duration_seconds": 125,
            "message_count": 7,
            "has_alerts": True,
        }
