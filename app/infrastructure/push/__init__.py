"""Push delivery transports."""

from .fcm import FirebasePushTransport, build_push_transport, error_kind_for
from .transport import NullPushTransport, PushTransport

__all__ = [
    "FirebasePushTransport",
    "NullPushTransport",
    "PushTransport",
    "build_push_transport",
    "error_kind_for",
]
