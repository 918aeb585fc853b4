"""Domain entities exposed by the application."""

from .device_token import DeviceToken
from .notification import Notification
from .push import (
    DispatchOutcome,
    DispatchStatus,
    FanOutResult,
    FanOutTally,
    NotificationPayload,
    RecipientToken,
    TransportErrorKind,
    TransportResult,
)
from .role import Role, normalize_role_alias
from .shared_file import SharedFile, UploadedFile
from .user import CUSTOMER_ROLE, User, normalize_email

__all__ = [
    "CUSTOMER_ROLE",
    "DeviceToken",
    "DispatchOutcome",
    "DispatchStatus",
    "FanOutResult",
    "FanOutTally",
    "Notification",
    "NotificationPayload",
    "RecipientToken",
    "Role",
    "SharedFile",
    "TransportErrorKind",
    "TransportResult",
    "UploadedFile",
    "User",
    "normalize_email",
    "normalize_role_alias",
]
