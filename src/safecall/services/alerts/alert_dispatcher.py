"""
Alert Dispatcher

Silently alerts every emergency contact and supplies the
camouflage line the companion says next.

SAFETY_CRITICAL: The camouflage text is shown in the call
timeline. It must read as ordinary small talk and never hint
that an alert was sent.
"""

from dataclasses import dataclass, field
from typing import Optional

from safecall.config.logging_config import get_logger
from safecall.domain.enums.call_enums import AlertReason
from safecall.infrastructure.contacts.contact_store import ContactStore
from safecall.infrastructure.metrics.prometheus_metrics import track_alert
from safecall.infrastructure.notifications.sink import NotificationSink

logger = get_logger(__name__)


@dataclass
class AlertDispatch:
    """
    Result of one dispatch.

    Attributes:
        reason: Why the alert fired
        camouflage_text: Line to append to the timeline
        contacts_notified: Names of contacts whose notification was emitted
        contacts_failed: Names of contacts whose sink call raised
    """

    reason: AlertReason
    camouflage_text: str
    contacts_notified: list[str] = field(default_factory=list)
    contacts_failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "reason": self.reason.value,
            "contacts_notified": len(self.contacts_notified),
            "contacts_failed": len(self.contacts_failed),
        }


class AlertDispatcher:
    """
    Emergency contact alerting.

    The dispatcher never touches the call session. It notifies
    contacts and returns what the session should append.

    Usage:
        dispatcher = AlertDispatcher(contact_store, notifier, location)
        dispatch = dispatcher.dispatch(AlertReason.CODE_WORD)
    """

    CAMOUFLAGE_LINES: dict[AlertReason, str] = {
        AlertReason.CODE_WORD: (
            "Got it! So anyway, have you seen any good movies lately? "
            "I've been wanting to catch up on some new releases."
        ),
        AlertReason.EMOTION_DETECTED: (
            "I hear you. By the way, speaking of that, have you been doing "
            "anything fun this week? Any plans coming up?"
        ),
    }

    def __init__(
        self,
        contact_store: ContactStore,
        notifier: NotificationSink,
        location: Optional[str] = None,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            contact_store: Source of emergency contacts
            notifier: Where contact notifications go
            location: Simulated location string attached to alerts
        """
        self._contacts = contact_store
        self._notifier = notifier
        self._location = location or "123 Main St, New York, NY 10001"

    def dispatch(self, reason: AlertReason) -> AlertDispatch:
        """
        Alert every emergency contact.

        A sink failure for one contact is logged and the remaining
        contacts are still notified.

        Args:
            reason: Why the alert fired

        Returns:
            AlertDispatch with the camouflage line
        """
        result = AlertDispatch(
            reason=reason,
            camouflage_text=self.CAMOUFLAGE_LINES[reason],
        )
        description = f"{reason.label}: {self._location}"

        for contact in self._contacts.list_contacts():
            try:
                self._notifier.notify(f"Alert sent to {contact.name}", description)
            except Exception as e:
                logger.error(
                    "Contact notification failed",
                    contact_id=contact.id,
                    reason=reason.value,
                    error=str(e),
                )
                result.contacts_failed.append(contact.name)
                continue
            result.contacts_notified.append(contact.name)

        if not result.contacts_notified:
            logger.warning("Alert dispatched with no contacts reached", reason=reason.value)
        else:
            logger.warning(
                "Alert dispatched",
                reason=reason.value,
                contacts_notified=len(result.contacts_notified),
                contacts_failed=len(result.contacts_failed),
            )

        track_alert(
            reason.value,
            sent=len(result.contacts_notified),
            failed=len(result.contacts_failed),
        )
        return result
