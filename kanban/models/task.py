"""
Task Model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from kanban.database import Base
from kanban.utils.clock import utcnow


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_column_order", "column_id", "order"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    column_id = Column(Integer, ForeignKey("columns.id"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, default="", nullable=False)
    # 1-based display position, contiguous among the column's live tasks
    order = Column(Integer, default=0, nullable=False)
    assignee_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    due_date = Column(Date, nullable=True)
    estimated_time = Column(Integer, nullable=True)  # minutes
    actual_time = Column(Integer, nullable=True)  # minutes
    is_completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    scheduled_start = Column(DateTime(timezone=True), nullable=True)
    scheduled_end = Column(DateTime(timezone=True), nullable=True)
    calendar_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    column = relationship("BoardColumn")
    assignee = relationship("User", foreign_keys=[assignee_id])
