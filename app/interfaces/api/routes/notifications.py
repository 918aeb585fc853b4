"""Endpoints triggering push fan-outs and exposing notification history."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import MissingParameterError, NotificationFanOut
from app.domain.entities import FanOutResult, Notification
from app.infrastructure.database import get_db
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.dependencies import get_fan_out
from app.interfaces.api.schemas import (
    EmailNotificationRequest,
    FanOutResultRead,
    FileNotificationRequest,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
    RoleNotificationRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _result_to_schema(result: FanOutResult) -> FanOutResultRead:
    return FanOutResultRead.model_validate(result)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        title=notification.title,
        body=notification.body,
        data=notification.data or {},
        sent_at=notification.sent_at,
        is_read=notification.is_read,
    )


def _bad_request(exc: MissingParameterError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/email", response_model=FanOutResultRead)
def send_notification_by_email(
    request: EmailNotificationRequest,
    fan_out: NotificationFanOut = Depends(get_fan_out),
) -> FanOutResultRead:
    """Send a notification to the approved user registered under an email."""

    try:
        result = fan_out.notify_by_email(
            request.recipient_email, request.message, title=request.title
        )
    except MissingParameterError as exc:
        raise _bad_request(exc) from exc
    return _result_to_schema(result)


@router.post("/role", response_model=FanOutResultRead, response_model_exclude_none=True)
def send_notification_to_role(
    request: RoleNotificationRequest,
    fan_out: NotificationFanOut = Depends(get_fan_out),
) -> FanOutResultRead:
    """Broadcast a notification to every approved member of a role."""

    try:
        result = fan_out.notify_role(
            request.role, request.title, request.body, data=request.data
        )
    except MissingParameterError as exc:
        raise _bad_request(exc) from exc
    return _result_to_schema(result)


@router.post("/file", response_model=FanOutResultRead)
def send_file_to_customer(
    request: FileNotificationRequest,
    fan_out: NotificationFanOut = Depends(get_fan_out),
) -> FanOutResultRead:
    """Tell a customer that a file was sent to them."""

    try:
        result = fan_out.send_file_to_customer(
            request.customer_email,
            request.file_name,
            request.file_url,
            title=request.title,
            message=request.message,
        )
    except MissingParameterError as exc:
        raise _bad_request(exc) from exc
    return _result_to_schema(result)


@router.get("/users/{user_id}", response_model=list[NotificationRead])
def list_user_notifications(
    user_id: str,
    unread_only: bool = False,
    limit: int = 50,
    db: Session = Depends(get_db),
) -> list[NotificationRead]:
    """Return the most recent notifications sent to ``user_id``."""

    notifications = NotificationRepository(db).list_for_user(
        user_id, unread_only=unread_only, limit=limit
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/users/{user_id}/read", response_model=NotificationMarkReadResponse)
def mark_user_notifications_read(
    user_id: str,
    request: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
) -> NotificationMarkReadResponse:
    """Flag the given notifications of ``user_id`` as read."""

    updated = NotificationRepository(db).mark_as_read(request.unique_ids(), user_id=user_id)
    return NotificationMarkReadResponse(updated=updated)
