"""Use cases creating file records and announcing them to subscribers."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import SharedFile, UploadedFile, normalize_role_alias
from app.infrastructure.events import (
    SHARED_FILE_CREATED,
    UPLOADED_FILE_CREATED,
    RecordCreated,
)
from app.infrastructure.repositories import SharedFileRepository, UploadedFileRepository

logger = logging.getLogger(__name__)


def share_file(
    session: Session,
    *,
    file_name: str,
    file_url: str,
    shared_by: str,
    share_with_role: str,
    description: str | None = None,
) -> tuple[SharedFile, RecordCreated]:
    """Persist a shared file and return the event announcing it."""

    saved = SharedFileRepository(session).create(
        SharedFile(
            id=None,
            file_name=file_name,
            file_url=file_url,
            shared_by=shared_by,
            share_with_role=normalize_role_alias(share_with_role),
            description=description,
        )
    )
    logger.info("Shared file %s created for role %s", saved.id, saved.share_with_role)
    event = RecordCreated(
        event_name=SHARED_FILE_CREATED,
        record_id=saved.id,
        fields={
            "fileName": saved.file_name,
            "fileUrl": saved.file_url,
            "sharedBy": saved.shared_by,
            "shareWithRole": saved.share_with_role,
            "description": saved.description,
        },
    )
    return saved, event


def record_uploaded_file(
    session: Session,
    *,
    file_name: str,
    file_url: str,
    uploaded_by: str,
    file_type: str | None = None,
) -> tuple[UploadedFile, RecordCreated]:
    """Persist an uploaded file and return the event announcing it."""

    saved = UploadedFileRepository(session).create(
        UploadedFile(
            id=None,
            file_name=file_name,
            file_url=file_url,
            uploaded_by=uploaded_by,
            file_type=file_type,
        )
    )
    logger.info("Uploaded file %s recorded for user %s", saved.id, saved.uploaded_by)
    event = RecordCreated(
        event_name=UPLOADED_FILE_CREATED,
        record_id=saved.id,
        fields={
            "fileName": saved.file_name,
            "fileUrl": saved.file_url,
            "uploadedBy": saved.uploaded_by,
            "fileType": saved.file_type,
        },
    )
    return saved, event


__all__ = ["record_uploaded_file", "share_file"]
