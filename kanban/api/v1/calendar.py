"""Calendar settings and event endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from kanban.database import get_db
from kanban.dependencies import get_current_user
from kanban.models import User
from kanban.schemas import (
    CalendarEventCreate,
    CalendarEventResponse,
    CalendarEventUpdate,
    CalendarSettingsResponse,
    CalendarSettingsUpdate,
    MessageResponse,
    TaskScheduleRequest,
)
from kanban.schemas.types import UTCDateTime
from kanban.services import calendar

router = APIRouter()


@router.get("/settings", response_model=CalendarSettingsResponse)
def read_settings(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return calendar.get_settings(db, current_user)


@router.put("/settings", response_model=CalendarSettingsResponse)
def update_settings(
    update: CalendarSettingsUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return calendar.update_settings(db, current_user, update)


@router.get("/events", response_model=List[CalendarEventResponse])
def list_events(
    start: UTCDateTime = Query(...),
    end: UTCDateTime = Query(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Events overlapping ``[start, end)``, earliest first."""
    return calendar.list_events(db, current_user, start, end)


@router.post("/events", response_model=CalendarEventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: CalendarEventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return calendar.create_event(db, current_user, event_in)


@router.put("/events/{event_id}", response_model=CalendarEventResponse)
def update_event(
    event_id: int,
    update: CalendarEventUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return calendar.update_event(db, current_user, event_id, update)


@router.delete("/events/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    calendar.delete_event(db, current_user, event_id)
    return MessageResponse(message="Event deleted")


@router.post("/tasks/{task_id}/events", response_model=CalendarEventResponse, status_code=status.HTTP_201_CREATED)
def create_task_event(
    task_id: int,
    window: TaskScheduleRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return calendar.create_task_event(db, current_user, task_id, window.start, window.end)


@router.put("/tasks/{task_id}/schedule", response_model=CalendarEventResponse)
def update_task_schedule(
    task_id: int,
    window: TaskScheduleRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return calendar.update_task_schedule(db, current_user, task_id, window.start, window.end)
