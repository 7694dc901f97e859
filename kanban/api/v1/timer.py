"""Timer endpoints"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanban.database import get_db
from kanban.dependencies import get_current_user
from kanban.models import User
from kanban.schemas import TimerSessionResponse, TimerStart
from kanban.services import timer

router = APIRouter()


@router.post("/start", response_model=TimerSessionResponse, status_code=status.HTTP_201_CREATED)
def start_timer(
    timer_in: TimerStart,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return timer.start_timer(db, current_user, timer_in.task_id, timer_in.duration)


@router.put("/{session_id}/stop", response_model=TimerSessionResponse)
def stop_timer(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return timer.stop_timer(db, current_user, session_id)


@router.get("/active", response_model=Optional[TimerSessionResponse])
def read_active_timer(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The running session, or ``null`` when none is active."""
    return timer.get_active(db, current_user)


@router.get("/history", response_model=List[TimerSessionResponse])
def read_history(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return timer.history(db, current_user)


@router.get("/tasks/{task_id}", response_model=List[TimerSessionResponse])
def read_task_sessions(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return timer.sessions_for_task(db, current_user, task_id)
