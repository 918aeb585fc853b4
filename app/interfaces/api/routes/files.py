"""Endpoints recording shared and uploaded files."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.files import record_uploaded_file, share_file
from app.infrastructure.database import get_db
from app.infrastructure.events import RecordEventBus
from app.interfaces.api.dependencies import get_record_events
from app.interfaces.api.schemas import (
    SharedFileCreate,
    SharedFileRead,
    UploadedFileCreate,
    UploadedFileRead,
)

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/shared", response_model=SharedFileRead, status_code=status.HTTP_201_CREATED)
def create_shared_file(
    file_in: SharedFileCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    events: RecordEventBus = Depends(get_record_events),
) -> SharedFileRead:
    """Record a file shared with a role; members are notified in the background."""

    shared_file, event = share_file(
        db,
        file_name=file_in.file_name,
        file_url=file_in.file_url,
        shared_by=file_in.shared_by,
        share_with_role=file_in.share_with_role,
        description=file_in.description,
    )
    background_tasks.add_task(events.publish, event)
    return SharedFileRead.model_validate(shared_file)


@router.post("/uploaded", response_model=UploadedFileRead, status_code=status.HTTP_201_CREATED)
def create_uploaded_file(
    file_in: UploadedFileCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    events: RecordEventBus = Depends(get_record_events),
) -> UploadedFileRead:
    """Record an uploaded file; the uploader is notified in the background."""

    uploaded_file, event = record_uploaded_file(
        db,
        file_name=file_in.file_name,
        file_url=file_in.file_url,
        uploaded_by=file_in.uploaded_by,
        file_type=file_in.file_type,
    )
    background_tasks.add_task(events.publish, event)
    return UploadedFileRead.model_validate(uploaded_file)
