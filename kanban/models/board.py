"""
Board Model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from kanban.database import Base
from kanban.utils.clock import utcnow


class Board(Base):
    __tablename__ = "boards"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id])
    columns = relationship(
        "BoardColumn",
        primaryjoin="and_(Board.id == BoardColumn.board_id, BoardColumn.deleted_at.is_(None))",
        order_by="BoardColumn.order",
        viewonly=True,
    )
