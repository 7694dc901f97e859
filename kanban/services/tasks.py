"""Task CRUD, cross-column moves and column reordering."""
from typing import List, Sequence

from loguru import logger
from sqlalchemy.orm import Session, selectinload

from kanban.database import transaction
from kanban.errors import ValidationError
from kanban.models import Board, BoardColumn, Task, User
from kanban.schemas import TaskCreate, TaskUpdate
from kanban.services.guard import OwnershipGuard
from kanban.services.ordering import task_list
from kanban.utils.clock import utcnow


def _check_assignee(db: Session, assignee_id) -> None:
    if assignee_id is None:
        return
    exists = db.query(User.id).filter(User.id == assignee_id, User.deleted_at.is_(None)).first()
    if exists is None:
        raise ValidationError("Assignee not found")


def create_task(db: Session, user: User, task_in: TaskCreate) -> Task:
    with transaction(db):
        OwnershipGuard(db).column(task_in.column_id, user.id)
        _check_assignee(db, task_in.assignee_id)
        task = Task(
            title=task_in.title,
            description=task_in.description,
            assignee_id=task_in.assignee_id,
            due_date=task_in.due_date,
            estimated_time=task_in.estimated_time,
        )
        tasks = task_list(db)
        if task_in.order is None:
            tasks.append(task, task_in.column_id)
        else:
            tasks.insert_at(task, task_in.column_id, task_in.order)
    logger.debug("User {} created task {} in column {} at {}", user.id, task.id, task.column_id, task.order)
    return task


def get_task(db: Session, user: User, task_id: int) -> Task:
    return OwnershipGuard(db).task(task_id, user.id)


def list_assigned_tasks(db: Session, user: User) -> List[Task]:
    return (
        db.query(Task)
        .join(BoardColumn, Task.column_id == BoardColumn.id)
        .join(Board, BoardColumn.board_id == Board.id)
        .options(selectinload(Task.assignee))
        .filter(
            Task.assignee_id == user.id,
            Task.deleted_at.is_(None),
            BoardColumn.deleted_at.is_(None),
            Board.deleted_at.is_(None),
        )
        .order_by(Task.due_date.is_(None), Task.due_date.asc(), Task.id.asc())
        .all()
    )


def update_task(db: Session, user: User, task_id: int, changes: TaskUpdate) -> Task:
    """Apply the fields present in ``changes``; position is untouched."""
    provided = changes.provided()
    with transaction(db):
        task = OwnershipGuard(db).task(task_id, user.id)
        if "assignee_id" in provided:
            _check_assignee(db, provided["assignee_id"])
        if "description" in provided and provided["description"] is None:
            provided["description"] = ""
        if "is_completed" in provided and provided["is_completed"] != task.is_completed:
            task.completed_at = utcnow() if provided["is_completed"] else None

        for field, value in provided.items():
            setattr(task, field, value)
    return task


def delete_task(db: Session, user: User, task_id: int) -> None:
    with transaction(db):
        task = OwnershipGuard(db).task(task_id, user.id)
        task_list(db).delete(task)
    logger.debug("User {} deleted task {}", user.id, task_id)


def move_task(db: Session, user: User, task_id: int, new_column_id: int, new_order: int) -> Task:
    """Move a task to ``new_order`` in ``new_column_id`` (possibly its own column)."""
    with transaction(db):
        guard = OwnershipGuard(db)
        task = guard.task(task_id, user.id)
        guard.column(new_column_id, user.id)
        task_list(db).move_across(task, new_column_id, new_order)
    logger.info("User {} moved task {} to column {} at {}", user.id, task.id, task.column_id, task.order)
    return task


def reorder_tasks(db: Session, user: User, column_id: int, task_ids: Sequence[int]) -> List[Task]:
    with transaction(db):
        OwnershipGuard(db).column(column_id, user.id)
        tasks = task_list(db).bulk_reorder(column_id, task_ids)
    logger.info("User {} reordered tasks of column {}", user.id, column_id)
    return tasks
