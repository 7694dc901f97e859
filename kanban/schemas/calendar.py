"""Schemas for calendar settings and events"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from kanban.schemas.types import UTCDateTime

TIME_OF_DAY = r"^([01]\d|2[0-3]):[0-5]\d$"
COLOR = r"^#[0-9A-Fa-f]{6}$"


class CalendarSettingsUpdate(BaseModel):
    weekday_start_time: str = Field(..., pattern=TIME_OF_DAY)
    weekday_end_time: str = Field(..., pattern=TIME_OF_DAY)
    weekend_start_time: str = Field(..., pattern=TIME_OF_DAY)
    weekend_end_time: str = Field(..., pattern=TIME_OF_DAY)
    time_slot_duration: int = Field(..., ge=5, le=120)

    @model_validator(mode="after")
    def _check_windows(self):
        # Zero-padded HH:MM strings compare chronologically
        if self.weekday_end_time <= self.weekday_start_time:
            raise ValueError("weekday_end_time must be after weekday_start_time")
        if self.weekend_end_time <= self.weekend_start_time:
            raise ValueError("weekend_end_time must be after weekend_start_time")
        return self


class CalendarSettingsResponse(BaseModel):
    id: int
    user_id: int
    weekday_start_time: str
    weekday_end_time: str
    weekend_start_time: str
    weekend_end_time: str
    time_slot_duration: int

    class Config:
        from_attributes = True


class _TimeWindow(BaseModel):
    start: UTCDateTime
    end: UTCDateTime

    @model_validator(mode="after")
    def _check_window(self):
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self


class CalendarEventCreate(_TimeWindow):
    title: str = Field(..., min_length=1, max_length=255)
    color: Optional[str] = Field(default=None, pattern=COLOR)
    task_id: Optional[int] = None


class CalendarEventUpdate(_TimeWindow):
    title: str = Field(..., min_length=1, max_length=255)
    color: Optional[str] = Field(default=None, pattern=COLOR)


class TaskScheduleRequest(_TimeWindow):
    pass


class CalendarEventResponse(BaseModel):
    id: int
    user_id: int
    task_id: Optional[int]
    title: str
    start: datetime
    end: datetime
    color: str
    is_task_based: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
