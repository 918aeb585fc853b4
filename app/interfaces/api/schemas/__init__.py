from .file import SharedFileCreate, SharedFileRead, UploadedFileCreate, UploadedFileRead
from .notification import (
    EmailNotificationRequest,
    FanOutResultRead,
    FileNotificationRequest,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
    RoleNotificationRequest,
)

__all__ = [
    "EmailNotificationRequest",
    "FanOutResultRead",
    "FileNotificationRequest",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "RoleNotificationRequest",
    "SharedFileCreate",
    "SharedFileRead",
    "UploadedFileCreate",
    "UploadedFileRead",
]
