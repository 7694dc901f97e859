"""Column CRUD on top of the board-scoped ordering."""
from typing import List, Optional, Sequence

from loguru import logger
from sqlalchemy.orm import Session

from kanban.database import transaction
from kanban.models import BoardColumn, Task, User
from kanban.services.guard import OwnershipGuard
from kanban.services.ordering import column_list
from kanban.utils.clock import utcnow


def create_column(db: Session, user: User, board_id: int, title: str, order: Optional[int] = None) -> BoardColumn:
    with transaction(db):
        OwnershipGuard(db).board(board_id, user.id)
        column = BoardColumn(title=title)
        columns = column_list(db)
        if order is None:
            columns.append(column, board_id)
        else:
            columns.insert_at(column, board_id, order)
    return column


def rename_column(db: Session, user: User, column_id: int, title: str) -> BoardColumn:
    with transaction(db):
        column = OwnershipGuard(db).column(column_id, user.id)
        column.title = title
    return column


def move_column(db: Session, user: User, column_id: int, new_order: int) -> BoardColumn:
    with transaction(db):
        column = OwnershipGuard(db).column(column_id, user.id)
        column_list(db).move_within(column, new_order)
    return column


def delete_column(db: Session, user: User, column_id: int) -> None:
    """Soft-delete a column and its tasks, closing the gap among the board's columns."""
    with transaction(db):
        column = OwnershipGuard(db).column(column_id, user.id)
        db.query(Task).filter(
            Task.column_id == column.id,
            Task.deleted_at.is_(None),
        ).update({Task.deleted_at: utcnow()}, synchronize_session="fetch")
        column_list(db).delete(column)
    logger.info("User {} deleted column {} from board {}", user.id, column_id, column.board_id)


def reorder_columns(db: Session, user: User, board_id: int, column_ids: Sequence[int]) -> List[BoardColumn]:
    with transaction(db):
        OwnershipGuard(db).board(board_id, user.id)
        columns = column_list(db).bulk_reorder(board_id, column_ids)
    logger.info("User {} reordered columns of board {}", user.id, board_id)
    return columns
