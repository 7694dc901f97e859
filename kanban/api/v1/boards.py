"""Board endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanban.database import get_db
from kanban.dependencies import get_current_user
from kanban.models import User
from kanban.schemas import (
    BoardCreate,
    BoardResponse,
    BoardUpdate,
    BoardWithColumnsResponse,
    ColumnResponse,
    MessageResponse,
)
from kanban.services import boards

router = APIRouter()


@router.get("", response_model=List[BoardResponse])
def list_boards(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return boards.list_boards(db, current_user)


@router.get("/with-columns", response_model=List[BoardWithColumnsResponse])
def list_boards_with_columns(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Every board of the user with its columns and their tasks, in display order."""
    return boards.list_boards_with_columns(db, current_user)


@router.post("", response_model=BoardWithColumnsResponse, status_code=status.HTTP_201_CREATED)
def create_board(
    board_in: BoardCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return boards.create_board(db, current_user, board_in.name)


@router.get("/{board_id}/columns", response_model=List[ColumnResponse])
def list_board_columns(
    board_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return boards.get_board_with_columns(db, current_user, board_id).columns


@router.put("/{board_id}", response_model=BoardResponse)
def update_board(
    board_id: int,
    board_in: BoardUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return boards.update_board(db, current_user, board_id, board_in.name)


@router.delete("/{board_id}", response_model=MessageResponse)
def delete_board(
    board_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    boards.delete_board(db, current_user, board_id)
    return MessageResponse(message="Board deleted")
