"""Analytics endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kanban.database import get_db
from kanban.dependencies import get_current_user
from kanban.models import User
from kanban.schemas import TaskCompletionStats
from kanban.services import analytics

router = APIRouter()


@router.get("/task-completion", response_model=TaskCompletionStats)
def task_completion(
    year: Optional[int] = Query(default=None, ge=1970, le=9999),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return analytics.task_completion(db, current_user, year)
