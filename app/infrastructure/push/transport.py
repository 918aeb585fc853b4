"""Transport contract shared by the push delivery adapters."""

from __future__ import annotations

import logging
from typing import Mapping, Protocol

from app.domain.entities import TransportErrorKind, TransportResult

logger = logging.getLogger(__name__)


class PushTransport(Protocol):
    """Deliver one message to one device token."""

    def send(
        self, token: str, title: str, body: str, data: Mapping[str, str]
    ) -> TransportResult:
        ...


class NullPushTransport:
    """Transport used when push delivery is not configured.

    Every send is reported as an unavailable transport so callers count it as
    a transient failure and keep the token.
    """

    def send(
        self, token: str, title: str, body: str, data: Mapping[str, str]
    ) -> TransportResult:
        logger.info(
            "Push delivery not configured; dropping notification for token_prefix=%s",
            (token or "")[:8],
        )
        return TransportResult.failed(
            TransportErrorKind.UNAVAILABLE, "Push delivery is not configured"
        )


__all__ = ["NullPushTransport", "PushTransport"]
