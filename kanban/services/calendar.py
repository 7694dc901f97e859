"""Calendar settings and events, including events scheduled from tasks."""
from datetime import datetime
from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from kanban.database import transaction
from kanban.errors import NotFoundError, ValidationError
from kanban.models import CalendarEvent, CalendarSettings, Task, User
from kanban.models.calendar_event import DEFAULT_EVENT_COLOR, TASK_EVENT_COLOR
from kanban.schemas import CalendarEventCreate, CalendarEventUpdate, CalendarSettingsUpdate
from kanban.services.guard import OwnershipGuard
from kanban.utils.clock import utcnow


def get_settings(db: Session, user: User) -> CalendarSettings:
    """Return the user's settings, creating them with defaults on first read."""
    settings = (
        db.query(CalendarSettings)
        .filter(CalendarSettings.user_id == user.id, CalendarSettings.deleted_at.is_(None))
        .first()
    )
    if settings is None:
        with transaction(db):
            settings = CalendarSettings(user_id=user.id)
            db.add(settings)
            db.flush()
        logger.debug("Created default calendar settings for user {}", user.id)
    return settings


def update_settings(db: Session, user: User, update: CalendarSettingsUpdate) -> CalendarSettings:
    settings = get_settings(db, user)
    with transaction(db):
        for field, value in update.model_dump().items():
            setattr(settings, field, value)
    return settings


def list_events(db: Session, user: User, start: datetime, end: datetime) -> List[CalendarEvent]:
    """Events overlapping the half-open window ``[start, end)``."""
    if end <= start:
        raise ValidationError("end must be after start")
    return (
        db.query(CalendarEvent)
        .filter(
            CalendarEvent.user_id == user.id,
            CalendarEvent.deleted_at.is_(None),
            CalendarEvent.start < end,
            CalendarEvent.end > start,
        )
        .order_by(CalendarEvent.start.asc(), CalendarEvent.id.asc())
        .all()
    )


def create_event(db: Session, user: User, event_in: CalendarEventCreate) -> CalendarEvent:
    with transaction(db):
        if event_in.task_id is not None:
            OwnershipGuard(db).task(event_in.task_id, user.id)
        event = CalendarEvent(
            user_id=user.id,
            task_id=event_in.task_id,
            title=event_in.title,
            start=event_in.start,
            end=event_in.end,
            color=event_in.color or DEFAULT_EVENT_COLOR,
            is_task_based=False,
        )
        db.add(event)
        db.flush()
    return event


def update_event(db: Session, user: User, event_id: int, update: CalendarEventUpdate) -> CalendarEvent:
    with transaction(db):
        event = OwnershipGuard(db).calendar_event(event_id, user.id)
        event.title = update.title
        event.start = update.start
        event.end = update.end
        if update.color is not None:
            event.color = update.color
    return event


def delete_event(db: Session, user: User, event_id: int) -> None:
    with transaction(db):
        event = OwnershipGuard(db).calendar_event(event_id, user.id)
        event.deleted_at = utcnow()


def _apply_schedule(task: Task, start: datetime, end: datetime) -> None:
    task.scheduled_start = start
    task.scheduled_end = end
    task.calendar_date = start


def _task_event(db: Session, task_id: int, user_id: int) -> Optional[CalendarEvent]:
    return (
        db.query(CalendarEvent)
        .filter(
            CalendarEvent.task_id == task_id,
            CalendarEvent.user_id == user_id,
            CalendarEvent.is_task_based.is_(True),
            CalendarEvent.deleted_at.is_(None),
        )
        .order_by(CalendarEvent.id.asc())
        .first()
    )


def create_task_event(db: Session, user: User, task_id: int, start: datetime, end: datetime) -> CalendarEvent:
    """Schedule a task: create its calendar event and record the window on the task."""
    with transaction(db):
        task = OwnershipGuard(db).task(task_id, user.id)
        event = CalendarEvent(
            user_id=user.id,
            task_id=task.id,
            title=task.title,
            start=start,
            end=end,
            color=TASK_EVENT_COLOR,
            is_task_based=True,
        )
        db.add(event)
        _apply_schedule(task, start, end)
        db.flush()
    logger.info("User {} scheduled task {} as event {}", user.id, task_id, event.id)
    return event


def update_task_schedule(db: Session, user: User, task_id: int, start: datetime, end: datetime) -> CalendarEvent:
    """Move a scheduled task; the task and its event change together."""
    with transaction(db):
        task = OwnershipGuard(db).task(task_id, user.id)
        event = _task_event(db, task.id, user.id)
        if event is None:
            raise NotFoundError("No calendar event is linked to this task")
        event.start = start
        event.end = end
        _apply_schedule(task, start, end)
    return event
