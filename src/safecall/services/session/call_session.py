"""
Call Session Engine

Runs one live call: owns the session state, sequences
user input -> detection -> alert and/or reply, drives the
duration counters and emits the end-of-call summary.

ARCHITECTURE: This is the only component that mutates a Session.
Detection, response generation and alert dispatch read input and
return results; the engine applies them and publishes events.

SAFETY_CRITICAL:
- A code word match alerts immediately and suppresses the reply
- A distress match alerts after a delay and the reply still happens
- Nothing fires against a session once the call has ended
"""

import random
from functools import partial
from typing import Callable, Optional

from safecall.config.logging_config import get_logger
from safecall.config.settings import Settings, get_settings
from safecall.domain.enums.call_enums import (
    AlertReason,
    Sender,
    SessionEventType,
)
from safecall.domain.models.call_summary import CallSummary, format_duration
from safecall.domain.models.message import Message
from safecall.domain.models.session import Session
from safecall.domain.models.session_event import SessionEvent
from safecall.infrastructure.contacts.contact_store import (
    ContactStore,
    InMemoryContactStore,
)
from safecall.infrastructure.history.call_history import (
    CallHistorySink,
    InMemoryCallHistory,
)
from safecall.infrastructure.metrics.prometheus_metrics import (
    track_call_ended,
    track_call_started,
    track_reply,
    track_user_message,
)
from safecall.infrastructure.notifications.sink import (
    LoggingNotificationSink,
    NotificationSink,
)
from safecall.services.alerts.alert_dispatcher import AlertDispatcher
from safecall.services.detection.detection_pipeline import (
    DetectionOutcome,
    DetectionPipeline,
)
from safecall.services.response.response_generator import ResponseGenerator
from safecall.services.timing.asyncio_timer import AsyncioTimerService
from safecall.services.timing.timer_service import TimerCallback, TimerService

logger = get_logger(__name__)

SessionListener = Callable[[SessionEvent], None]


class CallSessionEngine:
    """
    Session state machine for one call.

    Lifecycle: NOT_STARTED -> ACTIVE -> ENDED (terminal).

    Every timer the engine schedules is tracked by id and cancelled
    by end_call(). Timer callbacks re-check that the call is still
    active and do nothing otherwise.

    Usage:
        engine = CallSessionEngine(timers=VirtualTimerService())
        engine.start_call()
        engine.send_user_message("I really like pineapple on pizza")
        summary = engine.end_call()
    """

    def __init__(
        self,
        timers: Optional[TimerService] = None,
        contact_store: Optional[ContactStore] = None,
        notifier: Optional[NotificationSink] = None,
        history: Optional[CallHistorySink] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        code_word: Optional[str] = None,
        ai_name: Optional[str] = None,
        detection: Optional[DetectionPipeline] = None,
        generator: Optional[ResponseGenerator] = None,
        dispatcher: Optional[AlertDispatcher] = None,
    ) -> None:
        """
        Initialize a call session.

        Args:
            timers: Timer service (defaults to the asyncio event loop)
            contact_store: Emergency contacts to alert
            notifier: User-visible notification sink
            history: Receives the summary when the call ends
            settings: Application settings
            rng: Random source for phrase choice and timing jitter
            code_word: Initial code word; blank falls back to the default
            ai_name: Companion display name
            detection: Detection pipeline
            generator: Response generator
            dispatcher: Alert dispatcher
        """
        self._settings = settings if settings is not None else get_settings()
        companion = self._settings.companion

        self._timers = timers if timers is not None else AsyncioTimerService()
        self._notifier = notifier if notifier is not None else LoggingNotificationSink()
        self._history = history if history is not None else InMemoryCallHistory()
        self._detection = detection if detection is not None else DetectionPipeline()
        if generator is None:
            generator = ResponseGenerator(
                rng=rng if rng is not None else random.Random(),
                timing=self._settings.timing,
            )
        self._generator = generator
        if contact_store is None:
            contact_store = InMemoryContactStore()
        if dispatcher is None:
            dispatcher = AlertDispatcher(
                contact_store=contact_store,
                notifier=self._notifier,
                location=companion.mock_location,
            )
        self._dispatcher = dispatcher

        if code_word is None or not code_word.strip():
            code_word = companion.default_code_word
        self._session = Session(
            ai_name=ai_name or companion.ai_name,
            code_word=code_word.strip(),
        )

        self._owned_timers: set[str] = set()
        self._call_timer: Optional[str] = None
        self._recording_timer: Optional[str] = None
        self._speaking_timer: Optional[str] = None
        self._thinking_timer: Optional[str] = None
        self._listeners: list[SessionListener] = []
        self._log = logger.bind(session_id=self._session.id)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        """The session state. Read it; mutate only through the engine."""
        return self._session

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._session.messages)

    @property
    def pending_timer_count(self) -> int:
        """Timers owned by this call that may still fire."""
        return len(self._owned_timers)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register an event listener.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_call(self) -> Message:
        """
        Start the call with the scripted greeting.

        Returns:
            The greeting message
        """
        now = self._timers.now()
        self._session.activate(now)

        greeting = self._session.add_message(
            Sender.ASSISTANT,
            self._settings.companion.greeting,
            now,
            is_voice=True,
        )
        self._call_timer = self._schedule_every(
            self._settings.timing.tick_interval_seconds,
            self._on_call_tick,
            "call-duration",
        )
        track_call_started()

        self._log.info("Call started", ai_name=self._session.ai_name)
        self._emit(SessionEventType.CALL_STARTED)
        self._emit_message(greeting)
        return greeting

    def end_call(self) -> CallSummary:
        """
        End the call.

        Cancels every outstanding timer, moves to ENDED, records the
        summary in call history and releases listeners.

        Returns:
            The call summary
        """
        self._session.require_active()

        cancelled = self._cancel_owned_timers()
        summary = self._session.end(self._timers.now())

        self._history.record(summary)
        track_call_ended(summary.duration_seconds, summary.has_alerts)

        self._log.info(
            "Call ended",
            duration_seconds=summary.duration_seconds,
            message_count=summary.message_count,
            has_alerts=summary.has_alerts,
            timers_cancelled=cancelled,
        )
        self._emit(SessionEventType.CALL_ENDED, **summary.to_dict())
        self._listeners.clear()
        return summary

    # ------------------------------------------------------------------
    # Conversation
    # ------------------------------------------------------------------

    def update_input(self, text: str) -> None:
        """Stage composer text without sending it."""
        self._session.set_pending_input(text)
        self._emit(SessionEventType.INPUT_CHANGED, length=len(text))

    def send_user_message(self, text: Optional[str] = None) -> Optional[Message]:
        """
        Send a user message.

        Appends the message, then runs detection synchronously:
        - code word: alert now, no reply for this message
        - distress: alert after a delay, reply as usual
        - otherwise: reply as usual

        Scheduling a reply drops any reply still pending for an
        earlier message.

        Args:
            text: Message text; the staged input is used when omitted

        Returns:
            The appended message, or None for blank input
        """
        self._session.require_active()
        if text is None:
            text = self._session.pending_input
        if not text.strip():
            return None

        message = self._session.add_message(
            Sender.USER,
            text,
            self._timers.now(),
            is_voice=self._session.voice_mode,
        )
        if self._session.pending_input:
            self._session.set_pending_input("")
            self._emit(SessionEventType.INPUT_CHANGED, length=0)
        track_user_message(message.is_voice)
        self._emit_message(message)

        detection = self._detection.evaluate(text, self._session.code_word)

        if detection.outcome == DetectionOutcome.CODE_WORD:
            self._log.warning("Code word matched; reply suppressed")
            self._raise_alert(AlertReason.CODE_WORD)
            return message

        if detection.outcome == DetectionOutcome.DISTRESS:
            self._log.warning(
                "Distress keywords detected",
                keyword_count=len(detection.distress_keywords_found),
            )
            self._schedule_once(
                self._settings.timing.distress_alert_delay_ms / 1000.0,
                partial(self._raise_alert, AlertReason.EMOTION_DETECTED),
                "distress-alert",
            )

        # Only the newest message gets a reply
        self._cancel(self._thinking_timer)
        self._cancel(self._speaking_timer)
        self._thinking_timer = None
        self._speaking_timer = None
        self._schedule_reply(text)
        return message

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def toggle_mute(self) -> bool:
        return self._toggle_flag("is_muted")

    def toggle_video(self) -> bool:
        return self._toggle_flag("is_video_on")

    def toggle_voice_mode(self) -> bool:
        return self._toggle_flag("voice_mode")

    def toggle_recording(self) -> bool:
        """
        Start or stop recording.

        Stopping reports the duration observed at the moment of the
        toggle, then resets the counter for the next recording.

        Returns:
            New is_recording value
        """
        session = self._session
        session.require_active()

        if not session.is_recording:
            session.start_recording()
            self._recording_timer = self._schedule_every(
                self._settings.timing.tick_interval_seconds,
                self._on_recording_tick,
                "recording",
            )
            self._notifier.notify("Recording started", "Your call is now being recorded")
            self._emit(SessionEventType.RECORDING_STARTED)
            return True

        self._cancel(self._recording_timer)
        self._recording_timer = None
        recorded = session.stop_recording()
        formatted = format_duration(recorded)

        self._notifier.notify("Recording saved", f"Recording duration: {formatted}")
        self._log.info("Recording saved", duration_seconds=recorded)
        self._emit(
            SessionEventType.RECORDING_SAVED,
            duration_seconds=recorded,
            formatted_duration=formatted,
        )
        return False

    # ------------------------------------------------------------------
    # Code word
    # ------------------------------------------------------------------

    def stage_code_word(self, value: str) -> None:
        """Stage a new code word; it takes effect on save."""
        self._session.stage_code_word(value)
        self._emit(SessionEventType.CODE_WORD_STAGED)

    def discard_code_word(self) -> None:
        self._session.discard_code_word()

    def save_code_word(self) -> bool:
        """
        Commit the staged code word.

        Applies to messages sent after the save only.

        Returns:
            True if the active code word changed
        """
        if not self._session.commit_code_word():
            self._log.warning("Blank code word ignored; keeping current code word")
            return False

        self._notifier.notify(
            "Code word updated",
            f'Your emergency code word is now: "{self._session.code_word}"',
        )
        self._log.info("Code word updated")
        self._emit(SessionEventType.CODE_WORD_UPDATED)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _toggle_flag(self, flag: str) -> bool:
        value = self._session.toggle(flag)
        self._emit(SessionEventType.FLAG_CHANGED, flag=flag, value=value)
        return value

    def _raise_alert(self, reason: AlertReason) -> None:
        self._session.mark_alerted()
        dispatch = self._dispatcher.dispatch(reason)
        camouflage = self._session.add_message(
            Sender.ASSISTANT,
            dispatch.camouflage_text,
            self._timers.now(),
            is_voice=True,
        )
        self._emit(SessionEventType.ALERT_DISPATCHED, **dispatch.to_dict())
        self._emit_message(camouflage)

    def _schedule_reply(self, text: str) -> None:
        self._set_typing(True)
        self._thinking_timer = self._schedule_once(
            self._generator.thinking_delay(),
            partial(self._deliver_reply, text),
            "thinking",
        )

    def _deliver_reply(self, text: str) -> None:
        self._thinking_timer = None
        self._set_typing(False)

        reply = self._generator.generate(text, self._session.ai_name)
        message = self._session.add_message(
            Sender.ASSISTANT,
            reply.text,
            self._timers.now(),
            is_voice=True,
        )
        track_reply(reply.category)
        self._set_speaking(True)
        self._emit_message(message, category=reply.category)

        # A newer reply owns the speaking window
        self._cancel(self._speaking_timer)
        self._speaking_timer = self._schedule_once(
            self._generator.speaking_duration(reply.text),
            self._finish_speaking,
            "speaking",
        )

    def _finish_speaking(self) -> None:
        self._speaking_timer = None
        self._set_speaking(False)

    def _set_typing(self, value: bool) -> None:
        if self._session.is_typing != value:
            self._session.set_typing(value)
            self._emit(SessionEventType.TYPING_CHANGED, value=value)

    def _set_speaking(self, value: bool) -> None:
        if self._session.is_assistant_speaking != value:
            self._session.set_speaking(value)
            self._emit(SessionEventType.SPEAKING_CHANGED, value=value)

    def _on_call_tick(self) -> None:
        seconds = self._session.tick_call()
        self._emit(SessionEventType.CALL_TICK, seconds=seconds)

    def _on_recording_tick(self) -> None:
        if not self._session.is_recording:
            return
        seconds = self._session.tick_recording()
        self._emit(SessionEventType.RECORDING_TICK, seconds=seconds)

    def _schedule_once(self, delay: float, callback: TimerCallback, name: str) -> str:
        def fire() -> None:
            self._owned_timers.discard(timer_id)
            if not self._session.is_active:
                self._log.debug("Timer fired after call ended", timer=name)
                return
            callback()

        timer_id = self._timers.call_later(delay, fire, name)
        self._owned_timers.add(timer_id)
        return timer_id

    def _schedule_every(self, interval: float, callback: TimerCallback, name: str) -> str:
        def fire() -> None:
            if not self._session.is_active:
                self._log.debug("Timer fired after call ended", timer=name)
                return
            callback()

        timer_id = self._timers.call_every(interval, fire, name)
        self._owned_timers.add(timer_id)
        return timer_id

    def _cancel(self, timer_id: Optional[str]) -> None:
        if timer_id is None or timer_id not in self._owned_timers:
            return
        self._owned_timers.discard(timer_id)
        self._timers.cancel(timer_id)

    def _cancel_owned_timers(self) -> int:
        cancelled = 0
        for timer_id in list(self._owned_timers):
            if self._timers.cancel(timer_id):
                cancelled += 1
        self._owned_timers.clear()
        self._call_timer = None
        self._recording_timer = None
        self._speaking_timer = None
        self._thinking_timer = None
        return cancelled

    def _emit_message(self, message: Message, **extra) -> None:
        self._emit(SessionEventType.MESSAGE_APPENDED, message=message.to_dict(), **extra)

    def _emit(self, event_type: SessionEventType, **payload) -> None:
        event = SessionEvent(
            type=event_type,
            session_id=self._session.id,
            timestamp=self._timers.now(),
            payload=payload,
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                self._log.error(
                    "Session listener failed",
                    event_type=event_type.value,
                    error=str(e),
                )
