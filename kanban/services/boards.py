"""Board lifecycle: creation with default columns, rename, cascade delete."""
from typing import List

from loguru import logger
from sqlalchemy.orm import Session, selectinload

from kanban.database import transaction
from kanban.models import Board, BoardColumn, Task, User
from kanban.services.guard import OwnershipGuard
from kanban.services.ordering import column_list
from kanban.utils.clock import utcnow

DEFAULT_COLUMN_TITLES = ("To Do", "In Progress", "Done")


def _with_columns(db: Session):
    return db.query(Board).populate_existing().options(
        selectinload(Board.columns).selectinload(BoardColumn.tasks).selectinload(Task.assignee)
    )


def list_boards(db: Session, user: User) -> List[Board]:
    return (
        db.query(Board)
        .filter(Board.owner_id == user.id, Board.deleted_at.is_(None))
        .order_by(Board.created_at.asc(), Board.id.asc())
        .all()
    )


def list_boards_with_columns(db: Session, user: User) -> List[Board]:
    return (
        _with_columns(db)
        .filter(Board.owner_id == user.id, Board.deleted_at.is_(None))
        .order_by(Board.created_at.asc(), Board.id.asc())
        .all()
    )


def get_board_with_columns(db: Session, user: User, board_id: int) -> Board:
    OwnershipGuard(db).board(board_id, user.id)
    return _with_columns(db).filter(Board.id == board_id).one()


def create_board(db: Session, user: User, name: str) -> Board:
    """Create a board and its default columns in one transaction."""
    with transaction(db):
        board = Board(name=name, owner_id=user.id)
        db.add(board)
        db.flush()

        columns = column_list(db)
        for title in DEFAULT_COLUMN_TITLES:
            columns.append(BoardColumn(title=title), board.id)

    logger.info("User {} created board {}", user.id, board.id)
    return get_board_with_columns(db, user, board.id)


def update_board(db: Session, user: User, board_id: int, name: str) -> Board:
    with transaction(db):
        board = OwnershipGuard(db).board(board_id, user.id)
        board.name = name
    return board


def delete_board(db: Session, user: User, board_id: int) -> None:
    """Soft-delete the board together with its columns and their tasks."""
    with transaction(db):
        board = OwnershipGuard(db).board(board_id, user.id)
        now = utcnow()
        column_ids = db.query(BoardColumn.id).filter(BoardColumn.board_id == board.id).scalar_subquery()
        db.query(Task).filter(
            Task.column_id.in_(column_ids),
            Task.deleted_at.is_(None),
        ).update({Task.deleted_at: now}, synchronize_session=False)
        db.query(BoardColumn).filter(
            BoardColumn.board_id == board.id,
            BoardColumn.deleted_at.is_(None),
        ).update({BoardColumn.deleted_at: now}, synchronize_session=False)
        board.deleted_at = now

    # Bulk updates above bypassed the identity map
    db.expire_all()
    logger.info("User {} deleted board {}", user.id, board_id)
