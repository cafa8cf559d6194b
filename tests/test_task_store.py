"""Tests for the in-memory task store."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from task_manager_api.task_engine.store import TaskStore


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()


def test_add_and_get(store: TaskStore) -> None:
    with store.transaction() as tx:
        task = tx.add("Title", "Description")
        assert tx.get(task.id) is task
    assert store.get_one(task.id) is task
    assert len(store) == 1


def test_add_uses_given_time(store: TaskStore) -> None:
    when = datetime(2023, 12, 20, 12, 0, tzinfo=timezone.utc)
    with store.transaction() as tx:
        task = tx.add("Title", "Description", now=when)
    assert task.created_at == when
    assert task.updated_at == when


def test_update_in_place(store: TaskStore) -> None:
    with store.transaction() as tx:
        task = tx.add("Old", "old")
    later = datetime(2030, 1, 1, tzinfo=timezone.utc)
    with store.transaction() as tx:
        updated = tx.update(task.id, "New", "new", now=later)
    assert updated is task
    assert (task.title, task.description, task.updated_at) == ("New", "new", later)


def test_update_missing(store: TaskStore) -> None:
    with store.transaction() as tx:
        assert tx.update(7, "x", "y") is None


def test_remove_reindexes(store: TaskStore) -> None:
    with store.transaction() as tx:
        a = tx.add("A", "a")
        b = tx.add("B", "b")
        c = tx.add("C", "c")

    with store.transaction() as tx:
        assert tx.remove(a.id) is a
        assert tx.remove(a.id) is None

    assert store.get_one(b.id) is b
    assert store.get_one(c.id) is c
    assert [t.id for t in store.read_snapshot()] == [b.id, c.id]


def test_ids_keep_increasing_after_remove(store: TaskStore) -> None:
    with store.transaction() as tx:
        first = tx.add("A", "a")
        tx.add("B", "b")
        tx.remove(first.id)
        third = tx.add("C", "c")
    assert third.id == 3


def test_snapshot_is_a_copy(store: TaskStore) -> None:
    with store.transaction() as tx:
        tx.add("A", "a")
    snapshot = store.read_snapshot()
    snapshot.clear()
    assert len(store) == 1


def test_lock_released_after_error(store: TaskStore) -> None:
    with pytest.raises(RuntimeError):
        with store.transaction():
            raise RuntimeError("boom")
    # Would deadlock if the lock were still held.
    assert len(store) == 0


def test_stores_are_independent() -> None:
    one, two = TaskStore(), TaskStore()
    with one.transaction() as tx:
        tx.add("A", "a")
    assert len(one) == 1
    assert len(two) == 0
