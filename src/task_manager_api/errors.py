"""Domain errors raised by the task engine and rendered by the HTTP layer."""

from __future__ import annotations

from .constants import TASK_FIELDS_REQUIRED_MESSAGE, TASK_NOT_FOUND_MESSAGE


class TaskApiError(Exception):
    """Base class for errors that map onto an HTTP status and message."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class TaskNotFoundError(TaskApiError):
    status_code = 404
    default_message = TASK_NOT_FOUND_MESSAGE


class TaskValidationError(TaskApiError):
    status_code = 400
    default_message = TASK_FIELDS_REQUIRED_MESSAGE


class ConfigError(Exception):
    """Raised when the server configuration cannot be loaded."""
