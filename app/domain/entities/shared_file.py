"""Domain entities for file records that trigger notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class SharedFile:
    """A file shared by a user with every member of a role."""

    id: str | None
    file_name: str
    file_url: str
    shared_by: str
    share_with_role: str
    description: str | None = None
    created_at: datetime | None = None


@dataclass
class UploadedFile:
    """A file uploaded on behalf of a single user."""

    id: str | None
    file_name: str
    file_url: str
    uploaded_by: str
    file_type: str | None = None
    uploaded_at: datetime | None = None


__all__ = ["SharedFile", "UploadedFile"]
