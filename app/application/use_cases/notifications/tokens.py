"""Read and prune the device token registry."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import RecipientToken
from app.infrastructure.repositories import DeviceRepository

logger = logging.getLogger(__name__)


class TokenRegistry:
    """Expose the live tokens of users and drop tokens the transport rejected."""

    def __init__(self, devices: DeviceRepository) -> None:
        self._devices = devices

    def tokens_for(self, user_ids: str | Iterable[str]) -> list[RecipientToken]:
        """Return the flattened tokens registered by ``user_ids``."""

        if isinstance(user_ids, str):
            user_ids = [user_ids]
        tokens = [
            RecipientToken(token=device.token, user_id=device.user_id, device_id=device.device_id)
            for device in self._devices.list_for_users(user_ids)
            if device.token
        ]
        logger.info("Found %s tokens for %s user(s)", len(tokens), len(set(t.user_id for t in tokens)))
        return tokens

    def prune(self, recipient: RecipientToken) -> bool:
        """Delete the device entry behind ``recipient``.

        Failures are logged and reported as ``False``; they never abort the
        fan-out that found the token invalid.
        """

        try:
            removed = self._devices.delete(recipient.user_id, recipient.device_id)
        except SQLAlchemyError:
            logger.exception(
                "Error cleaning up invalid token for user %s, device %s",
                recipient.user_id,
                recipient.device_id,
            )
            return False
        if removed:
            logger.info(
                "Cleaned up invalid token for user %s, device %s",
                recipient.user_id,
                recipient.device_id,
            )
        return removed


__all__ = ["TokenRegistry"]
