"""Contiguous ordering of child rows within a parent scope.

Columns are ordered within their board and tasks within their column. Both
use the same rules: the live (not soft-deleted) children of a scope always
carry the orders ``1..N`` with no gaps and no duplicates. Every operation
here runs inside the caller's transaction; nothing is committed. A failure
part-way through a shift propagates so the caller rolls the whole unit back.

Before touching a scope, the parent row and the scope's live rows are
locked with ``SELECT ... FOR UPDATE`` so two transactions cannot compute
shifts from the same snapshot. Databases without row locks (SQLite)
serialize writers at the database level instead.
"""
from __future__ import annotations

from typing import Dict, List, Sequence

from loguru import logger
from sqlalchemy.orm import Query, Session

from kanban.errors import NotFoundError, ValidationError
from kanban.models import Board, BoardColumn, Task
from kanban.utils.clock import utcnow


class OrderedList:
    """Order maintenance for ``model`` rows grouped by ``scope_attr``.

    Args:
        db: Session whose transaction every change joins.
        model: Mapped class with ``id``, ``order`` and ``deleted_at`` columns.
        scope_attr: Name of the foreign key column pointing at the parent.
        parent_model: Mapped class of the parent, locked and checked for
            existence before the scope is touched.
        scope_label: Human readable parent name used in error messages.
        item_label: Human readable name of ``model`` used in error messages.
    """

    def __init__(self, db: Session, model, scope_attr: str, parent_model, scope_label: str, item_label: str):
        self.db = db
        self.model = model
        self.scope_attr = scope_attr
        self.scope_column = getattr(model, scope_attr)
        self.parent_model = parent_model
        self.scope_label = scope_label
        self.item_label = item_label

    # -- reads -------------------------------------------------------------

    def _live(self, scope_id: int) -> Query:
        return self.db.query(self.model).filter(
            self.scope_column == scope_id,
            self.model.deleted_at.is_(None),
        )

    def items(self, scope_id: int) -> List:
        return self._live(scope_id).order_by(self.model.order.asc()).all()

    # -- locking -----------------------------------------------------------

    def lock_scope(self, scope_id: int) -> List:
        """Lock the parent row and the scope's live rows; return the rows in order."""
        # Rows loaded before the lock are overwritten; pending changes go out first
        self.db.flush()
        parent = (
            self.db.query(self.parent_model)
            .populate_existing()
            .filter(self.parent_model.id == scope_id, self.parent_model.deleted_at.is_(None))
            .with_for_update()
            .one_or_none()
        )
        if parent is None:
            raise NotFoundError(f"{self.scope_label} not found")
        return (
            self._live(scope_id)
            .populate_existing()
            .order_by(self.model.order.asc())
            .with_for_update()
            .all()
        )

    def _reload(self, item) -> None:
        """Re-read ``item`` under a row lock; it may have moved since it was loaded."""
        self.db.refresh(item, with_for_update=True)
        if item.deleted_at is not None:
            raise NotFoundError(f"{self.item_label} not found")

    def lock_item_scope(self, item) -> List:
        """Lock the scope ``item`` currently lives in and return its rows.

        ``item`` is reloaded after the lock is taken. If another transaction
        moved it to a different scope in the meantime, that scope is locked
        instead.
        """
        while True:
            scope_id = getattr(item, self.scope_attr)
            rows = self.lock_scope(scope_id)
            self._reload(item)
            if getattr(item, self.scope_attr) == scope_id:
                return rows

    # -- shifting ----------------------------------------------------------

    def _shift(self, scope_id: int, delta: int, lower: int = None, upper: int = None, exclude_id: int = None) -> int:
        """Add ``delta`` to the order of live rows with ``lower <= order <= upper``."""
        # Pending attribute changes must reach the database before the bulk UPDATE
        self.db.flush()
        query = self._live(scope_id)
        if lower is not None:
            query = query.filter(self.model.order >= lower)
        if upper is not None:
            query = query.filter(self.model.order <= upper)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return query.update({self.model.order: self.model.order + delta}, synchronize_session="fetch")

    def _place(self, item, scope_id: int, order: int) -> None:
        setattr(item, self.scope_attr, scope_id)
        item.order = order
        self.db.add(item)
        self.db.flush()

    @staticmethod
    def _require_positive(order: int) -> None:
        if order is None or order < 1:
            raise ValidationError("order must be 1 or greater")

    # -- operations --------------------------------------------------------

    def append(self, item, scope_id: int):
        """Place ``item`` after the last live row of the scope."""
        rows = self.lock_scope(scope_id)
        next_order = max((row.order for row in rows), default=0) + 1
        self._place(item, scope_id, next_order)
        return item

    def insert_at(self, item, scope_id: int, target_order: int):
        """Insert ``item`` at ``target_order``, pushing later rows down by one.

        Orders past the end are clamped to ``count + 1``.
        """
        self._require_positive(target_order)
        rows = self.lock_scope(scope_id)
        target_order = min(target_order, len(rows) + 1)
        self._shift(scope_id, +1, lower=target_order)
        self._place(item, scope_id, target_order)
        return item

    def delete(self, item) -> None:
        """Soft-delete ``item`` and close the gap it leaves."""
        self.lock_item_scope(item)
        scope_id = getattr(item, self.scope_attr)
        old_order = item.order
        item.deleted_at = utcnow()
        self.db.flush()
        self._shift(scope_id, -1, lower=old_order + 1, exclude_id=item.id)

    def move_within(self, item, new_order: int):
        """Move ``item`` to ``new_order`` inside its current scope.

        Orders past the end are clamped to the last position.
        """
        self._require_positive(new_order)
        rows = self.lock_item_scope(item)
        scope_id = getattr(item, self.scope_attr)
        new_order = min(new_order, len(rows))
        old_order = item.order
        if new_order == old_order:
            return item

        if new_order > old_order:
            self._shift(scope_id, -1, lower=old_order + 1, upper=new_order, exclude_id=item.id)
        else:
            self._shift(scope_id, +1, lower=new_order, upper=old_order - 1, exclude_id=item.id)
        # The moved row is written last so no intermediate state duplicates an order
        item.order = new_order
        self.db.flush()
        logger.debug(
            "Moved {} {} from {} to {} in {} {}",
            self.model.__name__, item.id, old_order, new_order, self.scope_label.lower(), scope_id,
        )
        return item

    def move_across(self, item, new_scope_id: int, new_order: int):
        """Move ``item`` into another scope at ``new_order``.

        Same end state as deleting from the old scope and inserting into the
        new one: the old scope closes its gap, the new scope opens one, then a
        single update sets the new parent and order on ``item``.
        """
        self._require_positive(new_order)
        while True:
            old_scope_id = getattr(item, self.scope_attr)
            if new_scope_id == old_scope_id:
                return self.move_within(item, new_order)

            # Lock in id order so two opposite moves cannot deadlock
            locked: Dict[int, List] = {}
            for scope_id in sorted((old_scope_id, new_scope_id)):
                locked[scope_id] = self.lock_scope(scope_id)
            self._reload(item)
            if getattr(item, self.scope_attr) == old_scope_id:
                break

        new_order = min(new_order, len(locked[new_scope_id]) + 1)
        old_order = item.order
        self._shift(old_scope_id, -1, lower=old_order + 1, exclude_id=item.id)
        self._shift(new_scope_id, +1, lower=new_order, exclude_id=item.id)
        self._place(item, new_scope_id, new_order)
        logger.debug(
            "Moved {} {} from {} {}#{} to {} {}#{}",
            self.model.__name__, item.id,
            self.scope_label.lower(), old_scope_id, old_order,
            self.scope_label.lower(), new_scope_id, new_order,
        )
        return item

    def bulk_reorder(self, scope_id: int, ordered_ids: Sequence[int]) -> List:
        """Assign ``order = position + 1`` following ``ordered_ids``.

        The list must name every live row of the scope exactly once; anything
        else is rejected before a single row changes, so the scope can never be
        left with gaps or duplicates.
        """
        rows = self.lock_scope(scope_id)
        by_id = {row.id: row for row in rows}

        requested = list(ordered_ids)
        duplicates = sorted({item_id for item_id in requested if requested.count(item_id) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate ids in reorder request: {_join(duplicates)}")

        unknown = sorted(set(requested) - set(by_id))
        if unknown:
            raise ValidationError(
                f"Ids do not belong to {self.scope_label.lower()} {scope_id}: {_join(unknown)}"
            )

        missing = sorted(set(by_id) - set(requested))
        if missing:
            raise ValidationError(f"Reorder request must list every item; missing: {_join(missing)}")

        for position, item_id in enumerate(requested):
            by_id[item_id].order = position + 1
        self.db.flush()
        return [by_id[item_id] for item_id in requested]


def _join(ids) -> str:
    return ", ".join(str(item_id) for item_id in ids)


def column_list(db: Session) -> OrderedList:
    return OrderedList(db, BoardColumn, "board_id", parent_model=Board, scope_label="Board", item_label="Column")


def task_list(db: Session) -> OrderedList:
    return OrderedList(db, Task, "column_id", parent_model=BoardColumn, scope_label="Column", item_label="Task")
