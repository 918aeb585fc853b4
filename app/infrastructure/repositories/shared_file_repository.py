"""Persistence helpers for shared and uploaded file records."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import SharedFile, UploadedFile
from app.infrastructure.models import SharedFileModel, UserFileModel
from app.utils import ensure_app_timezone


class SharedFileRepository:
    """Create records describing files shared with a role."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, shared_file: SharedFile) -> SharedFile:
        model = SharedFileModel(
            file_name=shared_file.file_name,
            file_url=shared_file.file_url,
            shared_by=shared_file.shared_by,
            share_with_role=shared_file.share_with_role,
            description=shared_file.description,
        )
        _commit(self.session, model)
        return SharedFile(
            id=model.id,
            file_name=model.file_name,
            file_url=model.file_url,
            shared_by=model.shared_by,
            share_with_role=model.share_with_role,
            description=model.description,
            created_at=ensure_app_timezone(model.created_at),
        )


class UploadedFileRepository:
    """Create records describing files uploaded for a single user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, uploaded_file: UploadedFile) -> UploadedFile:
        model = UserFileModel(
            file_name=uploaded_file.file_name,
            file_url=uploaded_file.file_url,
            uploaded_by=uploaded_file.uploaded_by,
            file_type=uploaded_file.file_type,
        )
        _commit(self.session, model)
        return UploadedFile(
            id=model.id,
            file_name=model.file_name,
            file_url=model.file_url,
            uploaded_by=model.uploaded_by,
            file_type=model.file_type,
            uploaded_at=ensure_app_timezone(model.uploaded_at),
        )


def _commit(session: Session, model: object) -> None:
    session.add(model)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    session.refresh(model)


__all__ = ["SharedFileRepository", "UploadedFileRepository"]
