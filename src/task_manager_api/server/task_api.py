"""Task API endpoints.

This module provides a FastAPI router with list, get, create, update and
delete endpoints.  It is mounted under ``/tasks`` by the ``create_app``
factory.  Errors are raised as :class:`~task_manager_api.errors.TaskApiError`
subclasses and rendered by the app's exception handlers.

Create and update read the request body themselves instead of declaring a
body model: a body that is not a JSON object is treated as empty, and the
engine decides whether that is a missing task (404) or a missing field (400).
"""

from __future__ import annotations

import json
from typing import Callable, Optional

from fastapi import APIRouter, Path, Query, Request
from loguru import logger

from ..task_engine.engine import TaskEngine
from .models import ErrorResponse, TaskListResponse, TaskOut, TaskPayload

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Task not found"}}
_INVALID = {400: {"model": ErrorResponse, "description": "Invalid request body"}}

_TASK_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": TaskPayload.model_json_schema()}},
    }
}


async def _read_payload(request: Request) -> TaskPayload:
    """Parse the request body, treating anything but a JSON object as empty."""
    raw = await request.body()
    if not raw:
        return TaskPayload()
    try:
        data = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed JSON body on {} {}", request.method, request.url.path)
        return TaskPayload()
    if not isinstance(data, dict):
        return TaskPayload()
    return TaskPayload.model_validate(data)


# ---------------------------------------------------------------------------
# Router factory
# ---------------------------------------------------------------------------

def create_task_router(get_engine: Callable[[], TaskEngine]) -> APIRouter:
    """Create the task API router.

    Parameters
    ----------
    get_engine:
        A zero-argument callable returning the :class:`TaskEngine` that backs
        the current app.
    """
    router = APIRouter(prefix="/tasks", tags=["Tasks"])

    @router.get("", response_model=TaskListResponse, summary="Get a list of tasks")
    async def list_tasks(
        page: Optional[str] = Query(None, description="The page number for pagination"),
        page_size: Optional[str] = Query(
            None, alias="pageSize", description="The number of tasks per page"
        ),
        sort_by: Optional[str] = Query(
            None, alias="sortBy", description="Sort tasks by title or createdAt"
        ),
    ) -> dict:
        return get_engine().list_tasks(page=page, page_size=page_size, sort_by=sort_by)

    @router.get(
        "/{task_id}",
        response_model=TaskOut,
        responses=_NOT_FOUND,
        summary="Get details of a task by ID",
    )
    async def get_task(task_id: str = Path(..., description="Task ID")) -> dict:
        return get_engine().get_task(task_id).to_dict()

    @router.post(
        "",
        response_model=TaskOut,
        status_code=201,
        responses=_INVALID,
        openapi_extra=_TASK_BODY,
        summary="Create a new task",
    )
    async def create_task(request: Request) -> dict:
        payload = await _read_payload(request)
        task = get_engine().create_task(payload.title, payload.description)
        return task.to_dict()

    @router.put(
        "/{task_id}",
        response_model=TaskOut,
        responses={**_INVALID, **_NOT_FOUND},
        openapi_extra=_TASK_BODY,
        summary="Update an existing task by ID",
    )
    async def update_task(
        request: Request,
        task_id: str = Path(..., description="Task ID"),
    ) -> dict:
        payload = await _read_payload(request)
        task = get_engine().update_task(task_id, payload.title, payload.description)
        return task.to_dict()

    @router.delete(
        "/{task_id}",
        response_model=TaskOut,
        responses=_NOT_FOUND,
        summary="Delete a task by ID",
    )
    async def delete_task(task_id: str = Path(..., description="Task ID")) -> dict:
        return get_engine().delete_task(task_id).to_dict()

    return router
