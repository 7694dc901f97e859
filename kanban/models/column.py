"""
Board Column Model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from kanban.database import Base
from kanban.utils.clock import utcnow


class BoardColumn(Base):
    __tablename__ = "columns"
    __table_args__ = (Index("ix_columns_board_order", "board_id", "order"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    board_id = Column(Integer, ForeignKey("boards.id"), nullable=False, index=True)
    title = Column(String(50), nullable=False)
    # 1-based display position, contiguous among the board's live columns
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    board = relationship("Board")
    tasks = relationship(
        "Task",
        primaryjoin="and_(BoardColumn.id == Task.column_id, Task.deleted_at.is_(None))",
        order_by="Task.order",
        viewonly=True,
    )
