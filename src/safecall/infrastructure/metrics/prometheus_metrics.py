"""
Prometheus Metrics

Metrics for call session observability. The host application
decides how to expose them; render_metrics() gives the text format.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
"""

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    REGISTRY,
    generate_latest,
)

# =============================================================================
# CALL METRICS
# =============================================================================

CALLS_ENDED_TOTAL = Counter(
    "safecall_calls_ended_total",
    "Total number of calls ended",
    ["has_alerts"],
)

CALL_DURATION = Histogram(
    "safecall_call_duration_seconds",
    "Duration of completed calls",
    buckets=[30, 60, 120, 300, 600, 1800, 3600],
)

ACTIVE_CALLS = Gauge(
    "safecall_active_calls",
    "Number of calls currently in progress",
)

USER_MESSAGES_TOTAL = Counter(
    "safecall_user_messages_total",
    "User messages sent during calls",
    ["voice"],  # true, false
)

# =============================================================================
# ALERT METRICS
# =============================================================================

ALERTS_DISPATCHED_TOTAL = Counter(
    "safecall_alerts_dispatched_total",
    "Alerts dispatched by reason",
    ["reason"],  # code_word, emotion_detected
)

CONTACT_NOTIFICATIONS_TOTAL = Counter(
    "safecall_contact_notifications_total",
    "Emergency contact notifications by delivery result",
    ["result"],  # sent, failed
)

# =============================================================================
# CONVERSATION METRICS
# =============================================================================

REPLIES_GENERATED_TOTAL = Counter(
    "safecall_replies_generated_total",
    "Companion replies by conversation category",
    ["category"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_call_started() -> None:
    ACTIVE_CALLS.inc()


def track_call_ended(duration_seconds: int, has_alerts: bool) -> None:
    """Record call completion metrics."""
    ACTIVE_CALLS.dec()
    CALLS_ENDED_TOTAL.labels(has_alerts=str(has_alerts).lower()).inc()
    CALL_DURATION.observe(duration_seconds)


def track_user_message(is_voice: bool) -> None:
    USER_MESSAGES_TOTAL.labels(voice=str(is_voice).lower()).inc()


def track_alert(reason: str, sent: int, failed: int) -> None:
    """Record an alert and its per-contact delivery results."""
    ALERTS_DISPATCHED_TOTAL.labels(reason=reason).inc()
    if sent:
        CONTACT_NOTIFICATIONS_TOTAL.labels(result="sent").inc(sent)
    if failed:
        CONTACT_NOTIFICATIONS_TOTAL.labels(result="failed").inc(failed)


def track_reply(category: str) -> None:
    REPLIES_GENERATED_TOTAL.labels(category=category).inc()


def render_metrics() -> bytes:
    """Metrics in Prometheus text exposition format."""
    return generate_latest(REGISTRY)
