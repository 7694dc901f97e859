"""Column endpoints, including the task reorder of a single column"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanban.database import get_db
from kanban.dependencies import get_current_user
from kanban.models import User
from kanban.schemas import (
    ColumnCreate,
    ColumnMove,
    ColumnReorder,
    ColumnResponse,
    ColumnUpdate,
    MessageResponse,
    TaskReorder,
    TaskResponse,
)
from kanban.services import columns, tasks

router = APIRouter()


@router.post("/boards/{board_id}/columns", response_model=ColumnResponse, status_code=status.HTTP_201_CREATED)
def create_column(
    board_id: int,
    column_in: ColumnCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return columns.create_column(db, current_user, board_id, column_in.title, column_in.order)


@router.put("/boards/{board_id}/columns/reorder", response_model=List[ColumnResponse])
def reorder_columns(
    board_id: int,
    reorder: ColumnReorder,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Renumber the board's columns to follow ``column_ids`` exactly."""
    return columns.reorder_columns(db, current_user, board_id, reorder.column_ids)


@router.put("/columns/{column_id}", response_model=ColumnResponse)
def update_column(
    column_id: int,
    column_in: ColumnUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return columns.rename_column(db, current_user, column_id, column_in.title)


@router.put("/columns/{column_id}/move", response_model=ColumnResponse)
def move_column(
    column_id: int,
    move: ColumnMove,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return columns.move_column(db, current_user, column_id, move.new_order)


@router.delete("/columns/{column_id}", response_model=MessageResponse)
def delete_column(
    column_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    columns.delete_column(db, current_user, column_id)
    return MessageResponse(message="Column deleted")


@router.put("/columns/{column_id}/tasks/reorder", response_model=List[TaskResponse])
def reorder_tasks(
    column_id: int,
    reorder: TaskReorder,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return tasks.reorder_tasks(db, current_user, column_id, reorder.task_ids)
