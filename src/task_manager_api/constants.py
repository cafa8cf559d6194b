SERVICE_NAME = "Task Manager API"
SERVICE_VERSION = "1.0.0"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

SORT_BY_TITLE = "title"
SORT_BY_CREATED_AT = "createdAt"

TASK_NOT_FOUND_MESSAGE = "Task not found"
TASK_FIELDS_REQUIRED_MESSAGE = "Title and description are required"

ENV_PREFIX = "TASK_API_"
