"""SQLAlchemy model for registered push devices."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class DeviceModel(Base):
    """Push token registered by one device of a user."""

    __tablename__ = "user_device"
    __table_args__ = (
        UniqueConstraint("user_id", "device_id", name="uq_user_device_user_device"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        String(64), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    device_id = Column(String(120), nullable=False)
    token = Column(String(512), nullable=True)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    user = relationship("UserModel", back_populates="devices")


__all__ = ["DeviceModel"]
