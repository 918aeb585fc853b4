"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EmailNotificationRequest(BaseModel):
    """Notify one approved user identified by email.

    Required values are checked by the fan-out so a missing field yields the
    same ``Missing required parameters`` error for every caller.
    """

    recipient_email: str | None = None
    message: str | None = None
    title: str | None = None


class RoleNotificationRequest(BaseModel):
    """Broadcast a notification to every approved member of a role."""

    role: str | None = None
    title: str | None = None
    body: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class FileNotificationRequest(BaseModel):
    """Tell a single customer that a file was sent to them."""

    customer_email: str | None = None
    file_name: str | None = None
    file_url: str | None = None
    title: str | None = None
    message: str | None = None


class FanOutResultRead(BaseModel):
    """Aggregated outcome of a fan-out."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    message: str
    success_count: int
    failure_count: int
    user_found: bool | None = None


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[int] = []
        seen: set[int] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationMarkReadResponse(BaseModel):
    updated: int


class NotificationRead(BaseModel):
    """Representation of a notification stored in the user's history."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: str
    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)
    sent_at: datetime
    is_read: bool = False


__all__ = [
    "EmailNotificationRequest",
    "FanOutResultRead",
    "FileNotificationRequest",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "RoleNotificationRequest",
]
