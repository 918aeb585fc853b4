"""Append audit records for sent notifications."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Create one notification history entry per call; failures are logged only."""

    def __init__(self, notifications: NotificationRepository) -> None:
        self._notifications = notifications

    def record(
        self,
        recipient_id: str,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> Notification | None:
        notification = Notification(
            id=None,
            recipient_id=recipient_id,
            title=title,
            body=body,
            data=dict(data or {}),
            sent_at=now_in_app_timezone(),
            is_read=False,
        )
        try:
            saved = self._notifications.create(notification)
        except SQLAlchemyError:
            logger.exception("Error saving notification record for user %s", recipient_id)
            return None
        logger.info("Notification record saved: %s for user: %s", saved.id, recipient_id)
        return saved


__all__ = ["AuditRecorder"]
