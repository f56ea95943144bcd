"""
Notification Sinks

Fire-and-forget user-visible notifications (alert sent, recording
saved, code word updated). Delivery is not guaranteed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from safecall.config.logging_config import get_logger

logger = get_logger(__name__)


class NotificationSink(ABC):
    """Destination for notifications."""

    @abstractmethod
    def notify(self, title: str, description: str) -> None:
        """
        Emit a notification.

        Args:
            title: Short headline
            description: Detail line
        """
        ...


class LoggingNotificationSink(NotificationSink):
    """
    Writes notifications to the structured log.

    Only the title is logged. Descriptions carry the code word or
    the location and must not reach a log sink, whether or not
    redaction has been configured.
    """

    def notify(self, title: str, description: str) -> None:
        logger.info("Notification", title=title, description_length=len(description))


@dataclass(frozen=True)
class Notification:
    title: str
    description: str


class InMemoryNotificationSink(NotificationSink):
    """Collects notifications in order. Used by tests and previews."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, title: str, description: str) -> None:
        self.notifications.append(Notification(title=title, description=description))

    def titles(self) -> list[str]:
        return [n.title for n in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()
