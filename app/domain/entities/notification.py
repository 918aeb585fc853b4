"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Audit record of a push notification sent to a specific user."""

    id: int | None
    recipient_id: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    sent_at: datetime | None = None
    is_read: bool = False


__all__ = ["Notification"]
