"""Task completion statistics for the activity heatmap."""
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from kanban.models import Board, BoardColumn, Task, User
from kanban.utils.clock import as_utc, utcnow


def task_completion(db: Session, user: User, year: Optional[int] = None) -> dict:
    """Count the user's completed tasks per UTC day of ``year`` (default: this year)."""
    if year is None:
        year = utcnow().year
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)

    completed = (
        db.query(Task.completed_at)
        .join(BoardColumn, Task.column_id == BoardColumn.id)
        .join(Board, BoardColumn.board_id == Board.id)
        .filter(
            Board.owner_id == user.id,
            Board.deleted_at.is_(None),
            BoardColumn.deleted_at.is_(None),
            Task.deleted_at.is_(None),
            Task.is_completed.is_(True),
            Task.completed_at >= start,
            Task.completed_at < end,
        )
        .all()
    )

    daily = Counter(as_utc(completed_at).date().isoformat() for (completed_at,) in completed)
    return {
        "year": year,
        "total_tasks": sum(daily.values()),
        "daily_stats": dict(sorted(daily.items())),
    }
