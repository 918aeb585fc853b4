"""Push notification fan-out use cases."""

from .audit import AuditRecorder
from .dispatcher import PushDispatcher, classify
from .fan_out import MissingParameterError, NotificationFanOut
from .resolver import RecipientResolver
from .tokens import TokenRegistry
from .triggers import notify_file_shared, notify_file_uploaded, register_record_triggers

__all__ = [
    "AuditRecorder",
    "MissingParameterError",
    "NotificationFanOut",
    "PushDispatcher",
    "RecipientResolver",
    "TokenRegistry",
    "classify",
    "notify_file_shared",
    "notify_file_uploaded",
    "register_record_triggers",
]
