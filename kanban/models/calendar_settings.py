"""Per-user calendar display preferences"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from kanban.database import Base
from kanban.utils.clock import utcnow


class CalendarSettings(Base):
    __tablename__ = "calendar_settings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    weekday_start_time = Column(String(5), default="09:00", nullable=False)
    weekday_end_time = Column(String(5), default="18:00", nullable=False)
    weekend_start_time = Column(String(5), default="10:00", nullable=False)
    weekend_end_time = Column(String(5), default="16:00", nullable=False)
    time_slot_duration = Column(Integer, default=10, nullable=False)  # minutes
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="calendar_settings")
