"""Repository implementations for infrastructure layer."""

from .device_repository import DeviceRepository
from .notification_repository import NotificationRepository
from .role_repository import RoleRepository
from .shared_file_repository import SharedFileRepository, UploadedFileRepository
from .user_repository import UserRepository

__all__ = [
    "DeviceRepository",
    "NotificationRepository",
    "RoleRepository",
    "SharedFileRepository",
    "UploadedFileRepository",
    "UserRepository",
]
