"""In-memory task store with thread-safe locking.

Tasks are kept in insertion order for the lifetime of the store.  All reads and
writes go through :meth:`TaskStore.transaction`, which holds an exclusive lock
for the duration of the ``with`` block so that lookups, scans and mutations
made inside one block are atomic with respect to other threads.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from .model import Task, now_utc


# ---------------------------------------------------------------------------
# TaskStore
# ---------------------------------------------------------------------------

class TaskStore:
    """Thread-safe, process-lifetime store for :class:`Task` objects.

    Ids come from a counter that only moves forward, so an id is never handed
    out twice even after the task holding it has been deleted.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: list[Task] = []
        self._index: dict[int, int] = {}
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # -- public API ---------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[_TaskTx]:
        """Acquire the lock and yield a transaction over the live task list.

        Usage::

            with store.transaction() as tx:
                task = tx.get(3)
                if task is not None:
                    tx.update(3, "New title", "New description")
        """
        with self._lock:
            tx = _TaskTx(self)
            yield tx

    def read_snapshot(self) -> list[Task]:
        """Return a shallow copy of the tasks in insertion order."""
        with self._lock:
            return list(self._tasks)

    def get_one(self, task_id: int) -> Optional[Task]:
        with self._lock:
            idx = self._index.get(task_id)
            return self._tasks[idx] if idx is not None else None


class _TaskTx:
    """Operations over a :class:`TaskStore` while its lock is held."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    # -- lookups ------------------------------------------------------------

    def get(self, task_id: int) -> Optional[Task]:
        idx = self._store._index.get(task_id)
        return self._store._tasks[idx] if idx is not None else None

    # -- mutations ----------------------------------------------------------

    def add(self, title: str, description: str, now: Optional[datetime] = None) -> Task:
        store = self._store
        when = now or now_utc()
        task = Task(
            id=store._next_id,
            title=title,
            description=description,
            created_at=when,
            updated_at=when,
        )
        store._next_id += 1
        store._index[task.id] = len(store._tasks)
        store._tasks.append(task)
        return task

    def update(
        self,
        task_id: int,
        title: str,
        description: str,
        now: Optional[datetime] = None,
    ) -> Optional[Task]:
        task = self.get(task_id)
        if task is None:
            return None
        task.title = title
        task.description = description
        task.touch(now)
        return task

    def remove(self, task_id: int) -> Optional[Task]:
        """Physically remove a task, returning it (or ``None`` if absent)."""
        store = self._store
        idx = store._index.pop(task_id, None)
        if idx is None:
            return None
        task = store._tasks.pop(idx)
        # rebuild index
        store._index = {t.id: i for i, t in enumerate(store._tasks)}
        return task
