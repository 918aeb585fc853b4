"""Domain entity representing a registered push device."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class DeviceToken:
    """Push token registered by one device of a user."""

    user_id: str
    device_id: str
    token: str
    updated_at: datetime | None = None


__all__ = ["DeviceToken"]
