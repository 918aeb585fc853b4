"""Notifications sent in reaction to newly created file records."""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from typing import Any, Callable, Mapping

from app.domain.entities import NotificationPayload
from app.infrastructure.events import (
    SHARED_FILE_CREATED,
    UPLOADED_FILE_CREATED,
    RecordCreated,
    RecordEventBus,
)

from .fan_out import MissingParameterError, NotificationFanOut, require, timestamped

logger = logging.getLogger(__name__)

FILE_SHARED_TITLE = "New file shared"
FILE_UPLOADED_TITLE = "File upload complete"
DEFAULT_SENDER_NAME = "Admin"

FanOutFactory = Callable[[], AbstractContextManager[NotificationFanOut]]


def notify_file_shared(fan_out: NotificationFanOut, fields: Mapping[str, Any]) -> None:
    """Tell every approved member of ``shareWithRole`` about a shared file."""

    try:
        file_name = fields.get("fileName")
        role = fields.get("shareWithRole")
        require(fileName=file_name, shareWithRole=role)

        shared_by = fields.get("sharedBy")
        sender = fan_out.lookup_user(shared_by) if shared_by else None
        payload = NotificationPayload(
            FILE_SHARED_TITLE,
            f"{file_name} was shared",
            timestamped(
                {
                    "type": "file_shared",
                    "fileName": file_name,
                    "fileUrl": fields.get("fileUrl") or "",
                    "senderName": sender.email if sender else DEFAULT_SENDER_NAME,
                    "description": fields.get("description") or "",
                }
            ),
        )
        tally = fan_out.broadcast(role, payload)
        if tally.attempted == 0:
            logger.info("No tokens found for role: %s", role)
            return
        logger.info(
            "File sharing notification sent. Success: %s, Failed: %s",
            tally.success_count,
            tally.failure_count,
        )
    except MissingParameterError as exc:
        logger.error("Ignoring shared file record: %s", exc)
    except Exception:
        logger.exception("Error in file shared trigger")


def notify_file_uploaded(fan_out: NotificationFanOut, fields: Mapping[str, Any]) -> None:
    """Tell the uploader that their file is available."""

    try:
        file_name = fields.get("fileName")
        uploaded_by = fields.get("uploadedBy")
        require(fileName=file_name, uploadedBy=uploaded_by)

        payload = NotificationPayload(
            FILE_UPLOADED_TITLE,
            f"{file_name} was uploaded successfully",
            timestamped(
                {
                    "type": "file_uploaded",
                    "fileName": file_name,
                    "fileUrl": fields.get("fileUrl") or "",
                    "fileType": fields.get("fileType") or "unknown",
                }
            ),
        )
        tally = fan_out.notify_user(uploaded_by, payload)
        if tally.attempted == 0:
            logger.info("No tokens found for user: %s", uploaded_by)
            return
        logger.info(
            "File upload notification sent for: %s. Success: %s, Failed: %s",
            file_name,
            tally.success_count,
            tally.failure_count,
        )
    except MissingParameterError as exc:
        logger.error("Ignoring uploaded file record: %s", exc)
    except Exception:
        logger.exception("Error in file uploaded trigger")


def register_record_triggers(bus: RecordEventBus, open_fan_out: FanOutFactory) -> None:
    """Subscribe the file triggers to ``bus``.

    ``open_fan_out`` returns a context manager yielding a fan-out bound to a
    fresh store session for the duration of one event.
    """

    @bus.subscribe(SHARED_FILE_CREATED)
    def on_file_shared(event: RecordCreated) -> None:
        with open_fan_out() as fan_out:
            notify_file_shared(fan_out, event.fields)

    @bus.subscribe(UPLOADED_FILE_CREATED)
    def on_file_uploaded(event: RecordCreated) -> None:
        with open_fan_out() as fan_out:
            notify_file_uploaded(fan_out, event.fields)


__all__ = [
    "FILE_SHARED_TITLE",
    "FILE_UPLOADED_TITLE",
    "notify_file_shared",
    "notify_file_uploaded",
    "register_record_triggers",
]
