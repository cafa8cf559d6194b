"""Pydantic models for API requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_TASK_EXAMPLE = {
    "id": 1,
    "title": "Task 1",
    "description": "Description 1",
    "createdAt": "2023-12-20T12:00:00.000Z",
    "updatedAt": "2023-12-20T12:00:00.000Z",
}


class TaskPayload(BaseModel):
    """Body of create and update requests.

    Fields accept any JSON value; presence and type are checked by the engine
    so that every rejection carries the same error body.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "Task 1", "description": "Description 1"}},
    )

    title: Any = Field(None, description="Task title", json_schema_extra={"type": "string"})
    description: Any = Field(None, description="Task description", json_schema_extra={"type": "string"})


class TaskOut(BaseModel):
    """Task representation."""

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={"example": _TASK_EXAMPLE})

    id: int
    title: str
    description: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class TaskListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    page_size: int = Field(alias="pageSize")
    total_tasks: int = Field(alias="totalTasks")
    tasks: list[TaskOut] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str


class ServiceInfo(BaseModel):
    name: str
    version: str
    status: str
