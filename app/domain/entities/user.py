"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role

CUSTOMER_ROLE = "customer"


@dataclass
class User:
    """Core attributes describing a notification recipient."""

    id: str | None
    role: Role
    email: str
    is_approved: bool
    name: str | None = None
    created_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.matches(alias)

    def is_customer(self) -> bool:
        """Return ``True`` when the user is a customer."""

        return self.has_role(CUSTOMER_ROLE)

    def can_receive_notifications(self) -> bool:
        """Customers must be approved before they are notified."""

        return self.is_approved or not self.is_customer()


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lowercased for lookups."""

    return email.strip().lower()


__all__ = ["CUSTOMER_ROLE", "User", "normalize_email"]
