import random

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from conftest import create_board, create_task, register_user
from kanban.database import Base, build_session_factory, enable_sqlite_foreign_keys, transaction
from kanban.errors import NotFoundError, ValidationError
from kanban.models import User
from kanban.services import columns, tasks
from kanban.services.guard import OwnershipGuard
from kanban.services.ordering import column_list, task_list


def _column_titles(session: Session, board_id: int):
    session.expire_all()
    return [(c.title, c.order) for c in column_list(session).items(board_id)]


def _task_titles(session: Session, column_id: int):
    session.expire_all()
    return [(t.title, t.order) for t in task_list(session).items(column_id)]


def _assert_contiguous(rows):
    assert [order for _title, order in rows] == list(range(1, len(rows) + 1))


def test_new_board_gets_default_columns(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)

    assert _column_titles(db_session, board.id) == [("To Do", 1), ("In Progress", 2), ("Done", 3)]


def test_delete_then_insert_keeps_columns_contiguous(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    todo, in_progress, done = column_list(db_session).items(board.id)

    columns.delete_column(db_session, owner, in_progress.id)
    assert _column_titles(db_session, board.id) == [("To Do", 1), ("Done", 2)]

    columns.create_column(db_session, owner, board.id, "Review", order=2)
    assert _column_titles(db_session, board.id) == [("To Do", 1), ("Review", 2), ("Done", 3)]


def test_create_column_without_order_appends(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)

    column = columns.create_column(db_session, owner, board.id, "Backlog")

    assert column.order == 4


def test_insert_past_end_is_clamped(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    column = column_list(db_session).items(board.id)[0]
    create_task(db_session, owner, column.id, "t1")

    task = create_task(db_session, owner, column.id, "t2", order=50)

    assert task.order == 2
    _assert_contiguous(_task_titles(db_session, column.id))


def test_move_within_column_both_directions(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    column = column_list(db_session).items(board.id)[0]
    t1, t2, t3, t4 = [create_task(db_session, owner, column.id, f"t{i}") for i in range(1, 5)]

    tasks.move_task(db_session, owner, t1.id, column.id, 3)
    assert _task_titles(db_session, column.id) == [("t2", 1), ("t3", 2), ("t1", 3), ("t4", 4)]

    tasks.move_task(db_session, owner, t4.id, column.id, 1)
    assert _task_titles(db_session, column.id) == [("t4", 1), ("t2", 2), ("t3", 3), ("t1", 4)]

    # Past the end lands on the last position
    tasks.move_task(db_session, owner, t4.id, column.id, 10)
    assert _task_titles(db_session, column.id) == [("t2", 1), ("t3", 2), ("t1", 3), ("t4", 4)]


def test_move_task_to_empty_column(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    source, target, _done = column_list(db_session).items(board.id)
    t1, _t2, _t3 = [create_task(db_session, owner, source.id, f"t{i}") for i in range(1, 4)]

    moved = tasks.move_task(db_session, owner, t1.id, target.id, 1)

    assert moved.column_id == target.id
    assert _task_titles(db_session, source.id) == [("t2", 1), ("t3", 2)]
    assert _task_titles(db_session, target.id) == [("t1", 1)]


def test_move_across_matches_delete_then_insert(db_session: Session):
    owner = register_user(db_session, "owner@example.com")

    moved_board = create_board(db_session, owner, "moved")
    source, target, _ = column_list(db_session).items(moved_board.id)
    for title in ("a", "b", "c"):
        create_task(db_session, owner, source.id, title)
    for title in ("x", "y"):
        create_task(db_session, owner, target.id, title)
    b_task = task_list(db_session).items(source.id)[1]
    tasks.move_task(db_session, owner, b_task.id, target.id, 2)

    replayed_board = create_board(db_session, owner, "replayed")
    source2, target2, _ = column_list(db_session).items(replayed_board.id)
    for title in ("a", "b", "c"):
        create_task(db_session, owner, source2.id, title)
    for title in ("x", "y"):
        create_task(db_session, owner, target2.id, title)
    tasks.delete_task(db_session, owner, task_list(db_session).items(source2.id)[1].id)
    create_task(db_session, owner, target2.id, "b", order=2)

    assert _task_titles(db_session, source.id) == _task_titles(db_session, source2.id)
    assert _task_titles(db_session, target.id) == _task_titles(db_session, target2.id)
    assert _task_titles(db_session, target.id) == [("x", 1), ("b", 2), ("y", 3)]


def test_reorder_follows_requested_ids(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    column = column_list(db_session).items(board.id)[0]
    t1, t2, t3 = [create_task(db_session, owner, column.id, f"t{i}") for i in range(1, 4)]

    result = tasks.reorder_tasks(db_session, owner, column.id, [t3.id, t1.id, t2.id])

    assert [(t.title, t.order) for t in result] == [("t3", 1), ("t1", 2), ("t2", 3)]
    assert _task_titles(db_session, column.id) == [("t3", 1), ("t1", 2), ("t2", 3)]


def test_reorder_twice_is_idempotent(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    ids = [c.id for c in reversed(column_list(db_session).items(board.id))]

    columns.reorder_columns(db_session, owner, board.id, ids)
    once = _column_titles(db_session, board.id)
    columns.reorder_columns(db_session, owner, board.id, ids)

    assert _column_titles(db_session, board.id) == once == [("Done", 1), ("In Progress", 2), ("To Do", 3)]


@pytest.mark.parametrize("make_ids, message", [
    (lambda ids: [ids[0], ids[0], ids[1], ids[2]], "Duplicate"),
    (lambda ids: ids + [9999], "do not belong"),
    (lambda ids: ids[:2], "missing"),
])
def test_reorder_rejects_non_exhaustive_lists(db_session: Session, make_ids, message):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    column = column_list(db_session).items(board.id)[0]
    ids = [create_task(db_session, owner, column.id, f"t{i}").id for i in range(1, 4)]

    with pytest.raises(ValidationError) as exc:
        tasks.reorder_tasks(db_session, owner, column.id, make_ids(ids))

    assert message in exc.value.message
    assert _task_titles(db_session, column.id) == [("t1", 1), ("t2", 2), ("t3", 3)]


def test_reorder_rejects_task_from_other_column(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    first, second, _ = column_list(db_session).items(board.id)
    mine = create_task(db_session, owner, first.id, "mine")
    stranger = create_task(db_session, owner, second.id, "stranger")

    with pytest.raises(ValidationError):
        tasks.reorder_tasks(db_session, owner, first.id, [stranger.id, mine.id])


def test_orders_below_one_are_rejected(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    column = column_list(db_session).items(board.id)[0]
    task = create_task(db_session, owner, column.id, "t1")

    with pytest.raises(ValidationError):
        create_task(db_session, owner, column.id, "t0", order=0)
    with pytest.raises(ValidationError):
        tasks.move_task(db_session, owner, task.id, column.id, -1)
    assert _task_titles(db_session, column.id) == [("t1", 1)]


def test_deleted_task_cannot_be_moved(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    column = column_list(db_session).items(board.id)[0]
    task = create_task(db_session, owner, column.id, "t1")
    tasks.delete_task(db_session, owner, task.id)

    with pytest.raises(NotFoundError):
        tasks.move_task(db_session, owner, task.id, column.id, 1)


def test_random_operations_keep_every_scope_contiguous(db_session: Session):
    owner = register_user(db_session, "owner@example.com")
    board = create_board(db_session, owner)
    rng = random.Random(20240501)
    counter = 0

    for _ in range(120):
        column_ids = [c.id for c in column_list(db_session).items(board.id)]
        all_tasks = [t for cid in column_ids for t in task_list(db_session).items(cid)]
        action = rng.choice([
            "create", "create", "move", "delete", "reorder",
            "create_column", "delete_column", "move_column", "reorder_columns",
        ])
        counter += 1

        if action == "create_column" or (action == "delete_column" and len(column_ids) == 1):
            columns.create_column(db_session, owner, board.id, f"c{counter}", order=rng.choice([None, 1, 2, 9]))
        elif action == "delete_column":
            columns.delete_column(db_session, owner, rng.choice(column_ids))
        elif action == "move_column":
            columns.move_column(db_session, owner, rng.choice(column_ids), rng.randint(1, len(column_ids) + 2))
        elif action == "reorder_columns":
            rng.shuffle(column_ids)
            columns.reorder_columns(db_session, owner, board.id, column_ids)
        elif action == "create" or not all_tasks:
            create_task(db_session, owner, rng.choice(column_ids), f"t{counter}", order=rng.choice([None, 1, 2, 5]))
        elif action == "move":
            task = rng.choice(all_tasks)
            tasks.move_task(db_session, owner, task.id, rng.choice(column_ids), rng.randint(1, 6))
        elif action == "delete":
            tasks.delete_task(db_session, owner, rng.choice(all_tasks).id)
        else:
            column_id = rng.choice(column_ids)
            ids = [t.id for t in task_list(db_session).items(column_id)]
            rng.shuffle(ids)
            tasks.reorder_tasks(db_session, owner, column_id, ids)

        _assert_contiguous(_column_titles(db_session, board.id))
        for column_id in column_ids:
            _assert_contiguous(_task_titles(db_session, column_id))


@pytest.fixture
def file_sessions(tmp_path):
    """Session factory over a file database, so two sessions see separate snapshots."""
    file_engine = create_engine(
        f"sqlite:///{tmp_path / 'kanban.db'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(file_engine)
    Base.metadata.create_all(bind=file_engine)
    try:
        yield build_session_factory(file_engine)
    finally:
        file_engine.dispose()


def _seed_board(factory):
    setup = factory()
    try:
        owner = register_user(setup, "owner@example.com")
        board = create_board(setup, owner)
        first, second, _done = column_list(setup).items(board.id)
        task_ids = [create_task(setup, owner, first.id, f"t{i}").id for i in range(1, 4)]
        return owner.id, first.id, second.id, task_ids
    finally:
        setup.close()


def _live_tasks(factory, column_id: int):
    check = factory()
    try:
        return [(t.title, t.order) for t in task_list(check).items(column_id)]
    finally:
        check.close()


def test_delete_uses_position_committed_by_another_session(file_sessions):
    owner_id, column_id, _other_id, (t1, _t2, _t3) = _seed_board(file_sessions)
    first, second = file_sessions(), file_sessions()
    try:
        loaded = OwnershipGuard(first).task(t1, owner_id)
        assert loaded.order == 1

        tasks.move_task(second, second.get(User, owner_id), t1, column_id, 3)

        with transaction(first):
            task_list(first).delete(loaded)
    finally:
        first.close()
        second.close()

    assert _live_tasks(file_sessions, column_id) == [("t2", 1), ("t3", 2)]


def test_move_follows_task_moved_by_another_session(file_sessions):
    owner_id, column_id, other_id, (t1, _t2, _t3) = _seed_board(file_sessions)
    first, second = file_sessions(), file_sessions()
    try:
        loaded = OwnershipGuard(first).task(t1, owner_id)
        assert loaded.column_id == column_id

        tasks.move_task(second, second.get(User, owner_id), t1, other_id, 1)
        create_task(second, second.get(User, owner_id), other_id, "late")

        with transaction(first):
            task_list(first).move_across(loaded, other_id, 2)
    finally:
        first.close()
        second.close()

    assert _live_tasks(file_sessions, column_id) == [("t2", 1), ("t3", 2)]
    assert _live_tasks(file_sessions, other_id) == [("late", 1), ("t1", 2)]
