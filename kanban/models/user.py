"""
User Model
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from kanban.database import Base
from kanban.utils.clock import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    # Relationships
    boards = relationship(
        "Board",
        primaryjoin="and_(User.id == Board.owner_id, Board.deleted_at.is_(None))",
        order_by="Board.id",
        viewonly=True,
    )
    calendar_settings = relationship("CalendarSettings", back_populates="user", uselist=False)
