"""Push delivery through Firebase Cloud Messaging."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import firebase_admin
from firebase_admin import credentials, exceptions, messaging

from app.config import Settings
from app.domain.entities import TransportErrorKind, TransportResult

from .transport import NullPushTransport, PushTransport

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "push-fanout"

# Checked in order: the messaging errors subclass the generic platform errors.
_ERROR_KINDS: tuple[tuple[type[Exception], TransportErrorKind], ...] = (
    (messaging.UnregisteredError, TransportErrorKind.UNREGISTERED),
    (messaging.SenderIdMismatchError, TransportErrorKind.SENDER_ID_MISMATCH),
    (messaging.QuotaExceededError, TransportErrorKind.QUOTA_EXCEEDED),
    (messaging.ThirdPartyAuthError, TransportErrorKind.AUTHENTICATION),
    (exceptions.InvalidArgumentError, TransportErrorKind.INVALID_TOKEN),
    (exceptions.UnauthenticatedError, TransportErrorKind.AUTHENTICATION),
    (exceptions.PermissionDeniedError, TransportErrorKind.AUTHENTICATION),
    (exceptions.UnavailableError, TransportErrorKind.UNAVAILABLE),
    (exceptions.DeadlineExceededError, TransportErrorKind.UNAVAILABLE),
    (exceptions.ResourceExhaustedError, TransportErrorKind.QUOTA_EXCEEDED),
)


def error_kind_for(exc: Exception) -> TransportErrorKind:
    """Map a Firebase Admin SDK error onto a :class:`TransportErrorKind`."""

    for error_type, kind in _ERROR_KINDS:
        if isinstance(exc, error_type):
            return kind
    return TransportErrorKind.UNKNOWN


def _describe_firebase_error(exc: exceptions.FirebaseError) -> str:
    code = getattr(exc, "code", None)
    message = str(exc) or exc.__class__.__name__
    return f"{code}: {message}" if code else message


class FirebasePushTransport:
    """Send notifications with ``firebase_admin.messaging``."""

    def __init__(self, app: Any | None = None) -> None:
        self._app = app

    def send(
        self, token: str, title: str, body: str, data: Mapping[str, str]
    ) -> TransportResult:
        message = messaging.Message(
            token=token,
            notification=messaging.Notification(title=title, body=body),
            data=dict(data),
        )
        try:
            message_id = messaging.send(message, app=self._app)
        except exceptions.FirebaseError as exc:
            kind = error_kind_for(exc)
            detail = _describe_firebase_error(exc)
            logger.warning(
                "FCM rejected message for token_prefix=%s (%s): %s",
                token[:8],
                kind.value,
                detail,
            )
            return TransportResult.failed(kind, detail)
        except ValueError as exc:
            logger.warning("FCM message for token_prefix=%s is malformed: %s", token[:8], exc)
            return TransportResult.failed(TransportErrorKind.UNKNOWN, str(exc))
        return TransportResult.delivered(message_id)


def initialize_firebase_app(settings: Settings) -> Any:
    """Return the Firebase app configured from ``settings``, creating it once."""

    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    credential = credentials.Certificate(settings.fcm_credentials_file)
    options = {"projectId": settings.fcm_project_id} if settings.fcm_project_id else None
    return firebase_admin.initialize_app(credential, options, name=FIREBASE_APP_NAME)


def build_push_transport(settings: Settings) -> PushTransport:
    """Return the transport matching the configured push credentials."""

    if not settings.fcm_credentials_file:
        logger.info("FCM credentials not configured; push delivery disabled")
        return NullPushTransport()
    return FirebasePushTransport(initialize_firebase_app(settings))


__all__ = [
    "FIREBASE_APP_NAME",
    "FirebasePushTransport",
    "build_push_transport",
    "error_kind_for",
    "initialize_firebase_app",
]
