"""SQLAlchemy models for shared and uploaded file records."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _new_record_id() -> str:
    return uuid4().hex


class SharedFileModel(Base):
    """File shared with every approved member of a role."""

    __tablename__ = "shared_file"

    id = Column(String(64), primary_key=True, default=_new_record_id)
    file_name = Column(String(255), nullable=False)
    file_url = Column(String(1024), nullable=False)
    shared_by = Column(String(64), nullable=False, index=True)
    share_with_role = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


class UserFileModel(Base):
    """File uploaded on behalf of a single user."""

    __tablename__ = "user_file"

    id = Column(String(64), primary_key=True, default=_new_record_id)
    file_name = Column(String(255), nullable=False)
    file_url = Column(String(1024), nullable=False)
    uploaded_by = Column(String(64), nullable=False, index=True)
    file_type = Column(String(100), nullable=True)
    uploaded_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["SharedFileModel", "UserFileModel"]
