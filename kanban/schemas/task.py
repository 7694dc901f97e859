"""Schemas for tasks"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from kanban.schemas.types import UTCDateTime
from kanban.schemas.user import UserSummary


class TaskCreate(BaseModel):
    column_id: int
    title: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    # Omitted: append after the last task. Given: insert there and shift the rest.
    order: Optional[int] = None
    assignee_id: Optional[int] = None
    due_date: Optional[date] = None
    estimated_time: Optional[int] = Field(default=None, ge=0)


class TaskUpdate(BaseModel):
    """Partial update.

    Only fields present in the request body are applied; ``model_fields_set``
    tells an omitted field apart from an explicit ``null``, which clears the
    nullable fields.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    assignee_id: Optional[int] = None
    due_date: Optional[date] = None
    estimated_time: Optional[int] = Field(default=None, ge=0)
    is_completed: Optional[bool] = None
    scheduled_start: Optional[UTCDateTime] = None
    scheduled_end: Optional[UTCDateTime] = None
    calendar_date: Optional[UTCDateTime] = None

    @model_validator(mode="after")
    def _reject_null_for_required_fields(self):
        for name in ("title", "is_completed"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        if (
            self.scheduled_start is not None
            and self.scheduled_end is not None
            and self.scheduled_end < self.scheduled_start
        ):
            raise ValueError("scheduled_end must not be before scheduled_start")
        return self

    def provided(self) -> dict:
        """Return the fields the client actually sent, with their values."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class TaskMove(BaseModel):
    new_column_id: int
    new_order: int


class TaskReorder(BaseModel):
    task_ids: List[int]


class TaskResponse(BaseModel):
    id: int
    column_id: int
    title: str
    description: str
    order: int
    assignee_id: Optional[int]
    assignee: Optional[UserSummary] = None
    due_date: Optional[date]
    estimated_time: Optional[int]
    actual_time: Optional[int]
    is_completed: bool
    completed_at: Optional[datetime]
    scheduled_start: Optional[datetime]
    scheduled_end: Optional[datetime]
    calendar_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
