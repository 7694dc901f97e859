"""Ownership checks along Task -> Column -> Board -> owner.

Every board, column and task endpoint goes through :class:`OwnershipGuard`
before it reads or mutates anything. A missing or soft-deleted link anywhere
in the chain is reported as not found (404); an existing chain that ends at
somebody else's board is a permission error (403).
"""
from sqlalchemy.orm import Session

from kanban.errors import AuthorizationError, NotFoundError
from kanban.models import Board, BoardColumn, CalendarEvent, Task, TimerSession


class OwnershipGuard:
    def __init__(self, db: Session):
        self.db = db

    def _live(self, model, entity_id: int):
        return (
            self.db.query(model)
            .filter(model.id == entity_id, model.deleted_at.is_(None))
            .first()
        )

    def board(self, board_id: int, user_id: int) -> Board:
        board = self._live(Board, board_id)
        if board is None:
            raise NotFoundError("Board not found")
        if board.owner_id != user_id:
            raise AuthorizationError("You don't have access to this board")
        return board

    def column(self, column_id: int, user_id: int) -> BoardColumn:
        column = self._live(BoardColumn, column_id)
        if column is None:
            raise NotFoundError("Column not found")
        self.board(column.board_id, user_id)
        return column

    def task(self, task_id: int, user_id: int) -> Task:
        task = self._live(Task, task_id)
        if task is None:
            raise NotFoundError("Task not found")
        self.column(task.column_id, user_id)
        return task

    def calendar_event(self, event_id: int, user_id: int) -> CalendarEvent:
        event = self._live(CalendarEvent, event_id)
        if event is None:
            raise NotFoundError("Calendar event not found")
        if event.user_id != user_id:
            raise AuthorizationError("You don't have access to this event")
        return event

    def timer_session(self, session_id: int, user_id: int) -> TimerSession:
        session = self._live(TimerSession, session_id)
        if session is None:
            raise NotFoundError("Timer session not found")
        if session.user_id != user_id:
            raise AuthorizationError("You don't have access to this timer")
        return session
