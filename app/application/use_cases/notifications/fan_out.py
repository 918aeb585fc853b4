"""Coordinate recipient resolution, per-token delivery, pruning and auditing."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    FanOutResult,
    FanOutTally,
    NotificationPayload,
    RecipientToken,
    User,
)
from app.infrastructure.push import PushTransport
from app.infrastructure.repositories import (
    DeviceRepository,
    NotificationRepository,
    UserRepository,
)
from app.utils import epoch_millis

from .audit import AuditRecorder
from .dispatcher import PushDispatcher
from .resolver import RecipientResolver
from .tokens import TokenRegistry

logger = logging.getLogger(__name__)

ADMIN_MESSAGE_TYPE = "admin_message"
FILE_RECEIVED_TYPE = "file_received"
ADMIN_SENDER_TYPE = "admin"
DEFAULT_FILE_TITLE = "New file received"
DEFAULT_FILE_MESSAGE = "A new file was sent to you"


class MissingParameterError(ValueError):
    """Raised before any store access when required inputs are absent."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"Missing required parameters: {', '.join(self.missing)}")


def require(**values: Any) -> None:
    """Raise :class:`MissingParameterError` for every empty value."""

    missing = [
        name
        for name, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise MissingParameterError(missing)


def timestamped(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``data`` plus the millisecond ``timestamp`` system key."""

    return {**data, "timestamp": str(epoch_millis())}


class NotificationFanOut:
    """Send a notification to every device of the resolved recipients.

    Every entry point attempts each resolved token exactly once. Sends run
    concurrently, bounded by ``fan_out_width``; pruning of permanently invalid
    tokens and audit writes happen afterwards, on the calling thread, once the
    full outcome set is known.
    """

    def __init__(
        self,
        *,
        resolver: RecipientResolver,
        tokens: TokenRegistry,
        dispatcher: PushDispatcher,
        audit: AuditRecorder,
        fan_out_width: int = 10,
        default_title: str = "New notification",
    ) -> None:
        if fan_out_width < 1:
            raise ValueError("fan_out_width must be a positive integer")
        self._resolver = resolver
        self._tokens = tokens
        self._dispatcher = dispatcher
        self._audit = audit
        self._fan_out_width = fan_out_width
        self._default_title = default_title

    @classmethod
    def from_session(
        cls,
        session: Session,
        transport: PushTransport,
        *,
        fan_out_width: int | None = None,
        default_title: str | None = None,
    ) -> "NotificationFanOut":
        """Build a fan-out whose stores share ``session``."""

        settings = get_settings()
        return cls(
            resolver=RecipientResolver(UserRepository(session)),
            tokens=TokenRegistry(DeviceRepository(session)),
            dispatcher=PushDispatcher(transport),
            audit=AuditRecorder(NotificationRepository(session)),
            fan_out_width=(
                settings.push_fanout_width if fan_out_width is None else fan_out_width
            ),
            default_title=(
                settings.default_notification_title
                if default_title is None
                else default_title
            ),
        )

    # Direct entry points -------------------------------------------------

    def notify_by_email(
        self, recipient_email: str, message: str, title: str | None = None
    ) -> FanOutResult:
        """Notify the approved user registered under ``recipient_email``."""

        require(recipient_email=recipient_email, message=message)
        title = title or self._default_title
        audit_data = {"type": ADMIN_MESSAGE_TYPE, "senderType": ADMIN_SENDER_TYPE}
        logger.info("Attempting to send notification to: %s", recipient_email)
        return self._notify_recipient(
            recipient_email,
            NotificationPayload(title, message, timestamped(audit_data)),
            audit_data=audit_data,
            subject="Notification",
        )

    def send_file_to_customer(
        self,
        customer_email: str,
        file_name: str,
        file_url: str,
        title: str | None = None,
        message: str | None = None,
    ) -> FanOutResult:
        """Tell a single customer that ``file_name`` is available at ``file_url``."""

        require(customer_email=customer_email, file_name=file_name, file_url=file_url)
        title = title or DEFAULT_FILE_TITLE
        body = f"{file_name} - {message or DEFAULT_FILE_MESSAGE}"
        audit_data = {
            "type": FILE_RECEIVED_TYPE,
            "fileName": file_name,
            "fileUrl": file_url,
            "senderType": ADMIN_SENDER_TYPE,
        }
        logger.info("Attempting to send file to: %s, File: %s", customer_email, file_name)
        return self._notify_recipient(
            customer_email,
            NotificationPayload(title, body, timestamped(audit_data)),
            audit_data=audit_data,
            subject="File notification",
        )

    def notify_role(
        self,
        role: str,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> FanOutResult:
        """Broadcast to every approved member of ``role``."""

        require(role=role, title=title, body=body)
        caller_data = dict(data or {})
        payload = NotificationPayload(title, body, timestamped(caller_data))
        try:
            tally = self.broadcast(role, payload, audit_data=caller_data)
        except SQLAlchemyError as exc:
            logger.exception("Error sending notifications to role %s", role)
            return FanOutResult(
                success=False,
                message=f"Failed to send notifications: {exc}",
                success_count=0,
                failure_count=0,
            )

        if tally.attempted == 0:
            return FanOutResult(
                success=False,
                message=f"No tokens found for role: {role}",
                success_count=0,
                failure_count=0,
            )
        if tally.success_count:
            message = f"Sent {tally.success_count} notifications successfully"
        else:
            message = f"No notifications could be delivered to role: {role}"
        result = FanOutResult.from_tally(tally, message=message)
        logger.info(
            "Role %s notification result. Success: %s, Failed: %s",
            role,
            result.success_count,
            result.failure_count,
        )
        return result

    # Building blocks shared with the record triggers ----------------------

    def broadcast(
        self,
        role: str,
        payload: NotificationPayload,
        *,
        audit_data: Mapping[str, Any] | None = None,
    ) -> FanOutTally:
        """Send ``payload`` to every token of the approved members of ``role``.

        One audit record is written per delivered token. Store errors raised
        while resolving recipients propagate to the caller.
        """

        users = self._resolver.by_role(role)
        tokens = self._tokens.tokens_for(user.id for user in users)
        logger.info("Found %s tokens for role: %s", len(tokens), role)
        return self._deliver_and_record_each(tokens, payload, audit_data)

    def notify_user(
        self,
        user_id: str,
        payload: NotificationPayload,
        *,
        audit_data: Mapping[str, Any] | None = None,
    ) -> FanOutTally:
        """Send ``payload`` to every token of ``user_id`` without approval checks."""

        tokens = self._tokens.tokens_for(self._resolver.by_user_id(user_id))
        logger.info("Found %s tokens for user: %s", len(tokens), user_id)
        return self._deliver_and_record_each(tokens, payload, audit_data)

    def lookup_user(self, user_id: str) -> User | None:
        return self._resolver.get_user(user_id)

    def dispatch_all(
        self, tokens: Sequence[RecipientToken], payload: NotificationPayload
    ) -> FanOutTally:
        """Attempt every token once and collect the outcomes."""

        if not tokens:
            return FanOutTally()
        width = min(self._fan_out_width, len(tokens))
        send = partial(self._dispatcher.dispatch, payload=payload)
        if width == 1:
            outcomes = [send(token) for token in tokens]
        else:
            with ThreadPoolExecutor(
                max_workers=width, thread_name_prefix="push-fanout"
            ) as executor:
                outcomes = list(executor.map(send, tokens))
        return FanOutTally(outcomes=outcomes)

    # Internals -----------------------------------------------------------

    def _notify_recipient(
        self,
        email: str,
        payload: NotificationPayload,
        *,
        audit_data: Mapping[str, Any],
        subject: str,
    ) -> FanOutResult:
        user: User | None = None
        try:
            user = self._resolver.by_email(email)
            if user is None:
                return FanOutResult(
                    success=False,
                    message=f"User not found or not approved: {email}",
                    success_count=0,
                    failure_count=1,
                    user_found=False,
                )

            tokens = self._tokens.tokens_for(user.id)
            if not tokens:
                # A recipient without devices counts as one failed delivery.
                return FanOutResult(
                    success=False,
                    message=f"No device token found for user: {email}",
                    success_count=0,
                    failure_count=1,
                    user_found=True,
                )

            tally = self.dispatch_all(tokens, payload)
            self._prune(tally)
            self._audit.record(user.id, payload.title, payload.body, audit_data)
        except SQLAlchemyError as exc:
            logger.exception("Error notifying %s", email)
            return FanOutResult(
                success=False,
                message=str(exc),
                success_count=0,
                failure_count=1,
                user_found=user is not None,
            )

        if tally.success_count:
            message = f"{subject} sent successfully: {user.email}"
        else:
            message = f"{subject} could not be delivered: {user.email}"
        result = FanOutResult.from_tally(tally, message=message, user_found=True)
        logger.info("Notification result for %s: %s", email, result)
        return result

    def _deliver_and_record_each(
        self,
        tokens: Sequence[RecipientToken],
        payload: NotificationPayload,
        audit_data: Mapping[str, Any] | None,
    ) -> FanOutTally:
        tally = self.dispatch_all(tokens, payload)
        self._prune(tally)
        record_data = payload.data_dict() if audit_data is None else audit_data
        for outcome in tally.delivered():
            self._audit.record(
                outcome.recipient.user_id, payload.title, payload.body, record_data
            )
        return tally

    def _prune(self, tally: FanOutTally) -> None:
        for outcome in tally.permanent_failures():
            self._tokens.prune(outcome.recipient)


__all__ = [
    "ADMIN_MESSAGE_TYPE",
    "DEFAULT_FILE_MESSAGE",
    "DEFAULT_FILE_TITLE",
    "FILE_RECEIVED_TYPE",
    "MissingParameterError",
    "NotificationFanOut",
    "require",
    "timestamped",
]
