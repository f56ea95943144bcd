"""
Emergency Contact Domain Model

Contacts are owned by the external contact store.
The call engine only reads them at alert time.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmergencyContact:
    """
    A person to alert when the user is in danger.

    Attributes:
        id: Contact identifier
        name: Display name used in alert notifications
        phone: Phone number (PRIVACY: never logged)
        relationship: Relationship to the user
    """

    id: str
    name: str
    phone: str
    relationship: str = ""
