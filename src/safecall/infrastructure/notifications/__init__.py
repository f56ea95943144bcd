"""Notification infrastructure package."""

from safecall.infrastructure.notifications.sink import (
    InMemoryNotificationSink,
    LoggingNotificationSink,
    Notification,
    NotificationSink,
)

__all__ = [
    "NotificationSink",
    "LoggingNotificationSink",
    "InMemoryNotificationSink",
    "Notification",
]
