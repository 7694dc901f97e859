"""Kanban Database Models"""
from kanban.models.user import User
from kanban.models.board import Board
from kanban.models.column import BoardColumn
from kanban.models.task import Task
from kanban.models.calendar_event import CalendarEvent
from kanban.models.calendar_settings import CalendarSettings
from kanban.models.timer_session import TimerSession

__all__ = [
    "User",
    "Board",
    "BoardColumn",
    "Task",
    "CalendarEvent",
    "CalendarSettings",
    "TimerSession",
]
