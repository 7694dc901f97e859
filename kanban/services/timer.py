"""Start/stop timer sessions and roll them up into task actual time."""
from typing import List, Optional

from loguru import logger
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from kanban.database import transaction
from kanban.errors import ConflictError
from kanban.models import Task, TimerSession, User
from kanban.services.guard import OwnershipGuard
from kanban.utils.clock import as_utc, utcnow


def _sessions(db: Session):
    return db.query(TimerSession).options(selectinload(TimerSession.task)).filter(
        TimerSession.deleted_at.is_(None)
    )


def get_active(db: Session, user: User) -> Optional[TimerSession]:
    return (
        _sessions(db)
        .filter(TimerSession.user_id == user.id, TimerSession.is_active.is_(True))
        .order_by(TimerSession.start_time.desc())
        .first()
    )


def start_timer(db: Session, user: User, task_id: int, duration: int = 0) -> TimerSession:
    """Open a session on ``task_id``; a user may have only one running at a time."""
    with transaction(db):
        # Serialise concurrent starts for the same user
        db.query(User).filter(User.id == user.id).with_for_update().one()
        active = (
            db.query(TimerSession.id)
            .filter(
                TimerSession.user_id == user.id,
                TimerSession.is_active.is_(True),
                TimerSession.deleted_at.is_(None),
            )
            .with_for_update()
            .first()
        )
        if active is not None:
            raise ConflictError("An active timer already exists; stop it first")

        OwnershipGuard(db).task(task_id, user.id)
        session = TimerSession(
            task_id=task_id,
            user_id=user.id,
            start_time=utcnow(),
            duration=duration,
            is_active=True,
        )
        db.add(session)
        db.flush()
    logger.info("User {} started timer {} on task {}", user.id, session.id, task_id)
    return session


def _refresh_actual_time(db: Session, task_id: int) -> None:
    total_seconds = (
        db.query(func.coalesce(func.sum(TimerSession.duration), 0))
        .filter(
            TimerSession.task_id == task_id,
            TimerSession.is_active.is_(False),
            TimerSession.deleted_at.is_(None),
        )
        .scalar()
    )
    task = db.get(Task, task_id)
    if task is not None:
        task.actual_time = int(total_seconds) // 60


def stop_timer(db: Session, user: User, session_id: int) -> TimerSession:
    with transaction(db):
        session = OwnershipGuard(db).timer_session(session_id, user.id)
        if not session.is_active:
            raise ConflictError("This timer is already stopped")

        now = utcnow()
        session.end_time = now
        session.duration = max(0, int((now - as_utc(session.start_time)).total_seconds()))
        session.is_active = False
        db.flush()
        _refresh_actual_time(db, session.task_id)
    logger.info("User {} stopped timer {} after {}s", user.id, session.id, session.duration)
    return session


def history(db: Session, user: User) -> List[TimerSession]:
    return (
        _sessions(db)
        .filter(TimerSession.user_id == user.id)
        .order_by(TimerSession.start_time.desc(), TimerSession.id.desc())
        .all()
    )


def sessions_for_task(db: Session, user: User, task_id: int) -> List[TimerSession]:
    OwnershipGuard(db).task(task_id, user.id)
    return (
        _sessions(db)
        .filter(TimerSession.task_id == task_id)
        .order_by(TimerSession.start_time.desc(), TimerSession.id.desc())
        .all()
    )
