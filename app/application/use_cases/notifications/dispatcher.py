"""Send one payload to one token and classify the outcome."""

from __future__ import annotations

import logging

from app.domain.entities import (
    DispatchOutcome,
    DispatchStatus,
    NotificationPayload,
    RecipientToken,
    TransportErrorKind,
)
from app.infrastructure.push import PushTransport

logger = logging.getLogger(__name__)

PERMANENT_ERROR_KINDS = frozenset(
    {TransportErrorKind.UNREGISTERED, TransportErrorKind.INVALID_TOKEN}
)


def classify(error: TransportErrorKind | None) -> DispatchStatus:
    """Return the dispatch status for a transport result with ``error``."""

    if error is None:
        return DispatchStatus.DELIVERED
    if error in PERMANENT_ERROR_KINDS:
        return DispatchStatus.PERMANENT_FAILURE
    return DispatchStatus.TRANSIENT_FAILURE


class PushDispatcher:
    """Deliver payloads through a :class:`PushTransport`."""

    def __init__(self, transport: PushTransport) -> None:
        self._transport = transport

    def dispatch(
        self, recipient: RecipientToken, payload: NotificationPayload
    ) -> DispatchOutcome:
        """Attempt delivery once; never raises."""

        try:
            result = self._transport.send(
                recipient.token, payload.title, payload.body, payload.data_dict()
            )
        except Exception as exc:
            logger.exception("Error sending to token %s", recipient.token)
            return DispatchOutcome(
                status=DispatchStatus.TRANSIENT_FAILURE,
                recipient=recipient,
                error=TransportErrorKind.UNKNOWN,
                detail=str(exc) or exc.__class__.__name__,
            )

        status = classify(result.error)
        if status is DispatchStatus.DELIVERED:
            logger.info("Notification sent successfully to token: %s", recipient.token)
        else:
            logger.warning(
                "Error sending to token %s (%s): %s",
                recipient.token,
                status.value,
                result.detail or result.error.value,
            )
        return DispatchOutcome(
            status=status,
            recipient=recipient,
            error=result.error,
            detail=result.detail,
        )


__all__ = ["PERMANENT_ERROR_KINDS", "PushDispatcher", "classify"]
