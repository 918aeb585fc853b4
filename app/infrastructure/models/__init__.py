"""ORM models used by the application infrastructure."""

from .device import DeviceModel
from .notification import NotificationModel
from .role import RoleModel
from .shared_file import SharedFileModel, UserFileModel
from .user import UserModel

__all__ = [
    "DeviceModel",
    "NotificationModel",
    "RoleModel",
    "SharedFileModel",
    "UserFileModel",
    "UserModel",
]
