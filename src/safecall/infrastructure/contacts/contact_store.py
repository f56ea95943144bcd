"""
Emergency Contact Store

Read-only view of the user's emergency contacts, consumed by
the alert dispatcher. Contact management lives elsewhere.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from safecall.domain.models.contact import EmergencyContact


class ContactStore(ABC):
    """Source of emergency contacts."""

    @abstractmethod
    def list_contacts(self) -> list[EmergencyContact]:
        """
        Snapshot of the current contacts, in display order.

        Returns:
            A new list; callers may not mutate the store through it
        """
        ...


DEFAULT_CONTACTS: tuple[EmergencyContact, ...] = (
    EmergencyContact(id="1", name="Mom", phone="+1 (555) 123-4567", relationship="Mother"),
    EmergencyContact(id="2", name="Best Friend", phone="+1 (555) 987-6543", relationship="Friend"),
)


class InMemoryContactStore(ContactStore):
    """Contact store backed by a list. Seeded with demo contacts by default."""

    def __init__(self, contacts: Optional[Iterable[EmergencyContact]] = None) -> None:
        self._contacts = list(DEFAULT_CONTACTS if contacts is None else contacts)

    def list_contacts(self) -> list[EmergencyContact]:
        return list(self._contacts)

    def replace(self, contacts: Iterable[EmergencyContact]) -> None:
        """Swap in a new contact list (changes apply to later alerts)."""
        self._contacts = list(contacts)
