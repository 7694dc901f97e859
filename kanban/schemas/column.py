"""Schemas for board columns"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from kanban.schemas.task import TaskResponse


class ColumnCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=50)
    order: Optional[int] = None


class ColumnUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=50)


class ColumnMove(BaseModel):
    new_order: int


class ColumnReorder(BaseModel):
    column_ids: List[int]


class ColumnResponse(BaseModel):
    id: int
    board_id: int
    title: str
    order: int
    created_at: datetime
    updated_at: datetime
    tasks: List[TaskResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True
