"""Metrics infrastructure package."""

from safecall.infrastructure.metrics.prometheus_metrics import (
    ACTIVE_CALLS,
    ALERTS_DISPATCHED_TOTAL,
    CALL_DURATION,
    CALLS_ENDED_TOTAL,
    CONTACT_NOTIFICATIONS_TOTAL,
    REPLIES_GENERATED_TOTAL,
    USER_MESSAGES_TOTAL,
    render_metrics,
    track_alert,
    track_call_ended,
    track_call_started,
    track_reply,
    track_user_message,
)

__all__ = [
    # Call metrics
    "ACTIVE_CALLS",
    "CALL_DURATION",
    "CALLS_ENDED_TOTAL",
    "USER_MESSAGES_TOTAL",
    # Alert metrics
    "ALERTS_DISPATCHED_TOTAL",
    "CONTACT_NOTIFICATIONS_TOTAL",
    # Conversation metrics
    "REPLIES_GENERATED_TOTAL",
    # Helpers
    "track_call_started",
    "track_call_ended",
    "track_user_message",
    "track_alert",
    "track_reply",
    "render_metrics",
]
