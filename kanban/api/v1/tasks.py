"""Task endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanban.database import get_db
from kanban.dependencies import get_current_user
from kanban.models import User
from kanban.schemas import MessageResponse, TaskCreate, TaskMove, TaskResponse, TaskUpdate
from kanban.services import tasks

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return tasks.create_task(db, current_user, task_in)


@router.get("/assigned", response_model=List[TaskResponse])
def list_assigned_tasks(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return tasks.list_assigned_tasks(db, current_user)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return tasks.get_task(db, current_user, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    changes: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update only the fields present in the body."""
    return tasks.update_task(db, current_user, task_id, changes)


@router.put("/{task_id}/move", response_model=TaskResponse)
def move_task(
    task_id: int,
    move: TaskMove,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return tasks.move_task(db, current_user, task_id, move.new_column_id, move.new_order)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    tasks.delete_task(db, current_user, task_id)
    return MessageResponse(message="Task deleted")
