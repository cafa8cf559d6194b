"""Task engine: list, get, create, update and delete over a :class:`TaskStore`.

This is the entry-point for all task manipulation.  It owns input validation,
best-effort parsing of numeric request values, sorting and pagination; the
store underneath only keeps records.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from loguru import logger

from ..constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    SORT_BY_CREATED_AT,
    SORT_BY_TITLE,
)
from ..errors import TaskNotFoundError, TaskValidationError
from .model import Task
from .store import TaskStore


_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_int(raw: Any) -> Optional[int]:
    """Parse the leading integer of *raw*, or return ``None``.

    ``"2"`` and ``"2abc"`` give 2, ``"1.5"`` gives 1; anything without a
    leading integer (including ``None`` and ``""``) gives ``None``.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw == raw and abs(raw) != float("inf") else None
    m = _LEADING_INT_RE.match(str(raw))
    return int(m.group(1)) if m else None


def _positive_or(raw: Any, default: int) -> int:
    value = parse_int(raw)
    if value is None or value < 1:
        return default
    return value


def _require_fields(title: Any, description: Any) -> tuple[str, str]:
    if not title or not description:
        raise TaskValidationError()
    if not isinstance(title, str) or not isinstance(description, str):
        raise TaskValidationError()
    return title, description


_SORT_KEYS = {
    # Case-insensitive first, lowercase before uppercase on ties.
    SORT_BY_TITLE: lambda t: (t.title.casefold(), t.title.swapcase()),
    SORT_BY_CREATED_AT: lambda t: t.created_at,
}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TaskEngine:
    """Run task operations against a single store.

    Parameters
    ----------
    store:
        The backing store.  A fresh, empty one is created when omitted, so two
        engines built without arguments never share tasks.
    default_page_size:
        Page size used when a list request gives none (or an unusable one).
    """

    def __init__(
        self,
        store: Optional[TaskStore] = None,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.store = store if store is not None else TaskStore()
        self.default_page_size = default_page_size

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_tasks(
        self,
        page: Any = None,
        page_size: Any = None,
        sort_by: Optional[str] = None,
    ) -> dict[str, Any]:
        """Return one page of tasks, optionally sorted.

        Unknown ``sort_by`` values keep insertion order.  A page past the end
        is an empty list, not an error.
        """
        page_num = _positive_or(page, DEFAULT_PAGE)
        size = _positive_or(page_size, self.default_page_size)

        tasks = self.store.read_snapshot()
        key = _SORT_KEYS.get(sort_by or "")
        if key is not None:
            tasks.sort(key=key)

        start = (page_num - 1) * size
        window = tasks[start:start + size]
        return {
            "page": page_num,
            "pageSize": size,
            "totalTasks": len(tasks),
            "tasks": [t.to_dict() for t in window],
        }

    def get_task(self, task_id: Any) -> Task:
        tid = parse_int(task_id)
        task = self.store.get_one(tid) if tid is not None else None
        if task is None:
            logger.debug("Task {} not found", task_id)
            raise TaskNotFoundError()
        return task

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_task(self, title: Any, description: Any) -> Task:
        """Validate and append a new task, returning it."""
        try:
            title, description = _require_fields(title, description)
        except TaskValidationError:
            logger.debug("Rejected task creation: missing title or description")
            raise
        with self.store.transaction() as tx:
            task = tx.add(title, description)
        logger.info("Created task {}", task.id)
        return task

    def update_task(self, task_id: Any, title: Any, description: Any) -> Task:
        """Replace title and description of an existing task.

        The lookup happens before validation, so an unknown id is reported as
        not found even when the body is also invalid.
        """
        tid = parse_int(task_id)
        with self.store.transaction() as tx:
            task = tx.get(tid) if tid is not None else None
            if task is None:
                logger.debug("Task {} not found for update", task_id)
                raise TaskNotFoundError()
            title, description = _require_fields(title, description)
            tx.update(task.id, title, description)
        logger.info("Updated task {}", task.id)
        return task

    def delete_task(self, task_id: Any) -> Task:
        tid = parse_int(task_id)
        with self.store.transaction() as tx:
            task = tx.remove(tid) if tid is not None else None
        if task is None:
            logger.debug("Task {} not found for delete", task_id)
            raise TaskNotFoundError()
        logger.info("Deleted task {}", task.id)
        return task
