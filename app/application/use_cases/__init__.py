"""Aggregate application use cases."""

from .files import record_uploaded_file, share_file
from .notifications import NotificationFanOut
from .users import create_user

__all__ = [
    "NotificationFanOut",
    "create_user",
    "record_uploaded_file",
    "share_file",
]
