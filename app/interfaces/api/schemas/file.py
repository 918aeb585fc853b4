"""File record schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SharedFileCreate(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    file_url: str = Field(..., min_length=1, max_length=1024)
    shared_by: str = Field(..., min_length=1, max_length=64)
    share_with_role: str = Field(..., min_length=1, max_length=50)
    description: str | None = None


class SharedFileRead(SharedFileCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime | None = None


class UploadedFileCreate(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    file_url: str = Field(..., min_length=1, max_length=1024)
    uploaded_by: str = Field(..., min_length=1, max_length=64)
    file_type: str | None = Field(default=None, max_length=100)


class UploadedFileRead(UploadedFileCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    uploaded_at: datetime | None = None


__all__ = [
    "SharedFileCreate",
    "SharedFileRead",
    "UploadedFileCreate",
    "UploadedFileRead",
]
