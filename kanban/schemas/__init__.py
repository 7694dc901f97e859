"""
Pydantic schemas for request/response validation
"""
from kanban.schemas.user import UserCreate, UserLogin, UserResponse, UserSummary, ProfileUpdate, AuthResponse
from kanban.schemas.task import TaskCreate, TaskUpdate, TaskMove, TaskReorder, TaskResponse
from kanban.schemas.column import ColumnCreate, ColumnUpdate, ColumnMove, ColumnReorder, ColumnResponse
from kanban.schemas.board import BoardCreate, BoardUpdate, BoardResponse, BoardWithColumnsResponse
from kanban.schemas.calendar import (
    CalendarSettingsUpdate,
    CalendarSettingsResponse,
    CalendarEventCreate,
    CalendarEventUpdate,
    CalendarEventResponse,
    TaskScheduleRequest,
)
from kanban.schemas.timer import TimerStart, TimerSessionResponse
from kanban.schemas.analytics import TaskCompletionStats
from kanban.schemas.common import MessageResponse, ErrorResponse

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserSummary",
    "ProfileUpdate",
    "AuthResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskMove",
    "TaskReorder",
    "TaskResponse",
    "ColumnCreate",
    "ColumnUpdate",
    "ColumnMove",
    "ColumnReorder",
    "ColumnResponse",
    "BoardCreate",
    "BoardUpdate",
    "BoardResponse",
    "BoardWithColumnsResponse",
    "CalendarSettingsUpdate",
    "CalendarSettingsResponse",
    "CalendarEventCreate",
    "CalendarEventUpdate",
    "CalendarEventResponse",
    "TaskScheduleRequest",
    "TimerStart",
    "TimerSessionResponse",
    "TaskCompletionStats",
    "MessageResponse",
    "ErrorResponse",
]
