"""Emergency contact infrastructure package."""

from safecall.infrastructure.contacts.contact_store import (
    DEFAULT_CONTACTS,
    ContactStore,
    InMemoryContactStore,
)

__all__ = ["ContactStore", "InMemoryContactStore", "DEFAULT_CONTACTS"]
