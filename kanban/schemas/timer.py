"""Schemas for timer sessions"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TimerStart(BaseModel):
    task_id: int
    # Planned length in seconds; replaced by the measured length on stop
    duration: int = Field(default=0, ge=0)


class TimerTaskSummary(BaseModel):
    id: int
    title: str
    column_id: int

    class Config:
        from_attributes = True


class TimerSessionResponse(BaseModel):
    id: int
    task_id: int
    user_id: int
    start_time: datetime
    end_time: Optional[datetime]
    duration: int
    is_active: bool
    task: Optional[TimerTaskSummary] = None

    class Config:
        from_attributes = True
