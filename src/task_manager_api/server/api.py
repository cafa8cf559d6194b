"""FastAPI application factory for the task manager API."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import ServerConfig
from ..constants import SERVICE_NAME, SERVICE_VERSION
from ..errors import TaskApiError
from ..task_engine.engine import TaskEngine
from .models import ServiceInfo
from .task_api import create_task_router


def create_app(
    engine: Optional[TaskEngine] = None,
    enable_cors: bool = True,
    config: Optional[ServerConfig] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        engine: Task engine to serve. A new engine over an empty store is
            created when omitted, so every app starts with no tasks.
        enable_cors: Whether to enable CORS.
        config: Server settings; only ``default_page_size`` is used here.

    Returns:
        Configured FastAPI app.
    """
    config = config or ServerConfig()
    app = FastAPI(
        title=SERVICE_NAME,
        description="API for managing tasks",
        version=SERVICE_VERSION,
        docs_url="/api-docs",
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if engine is None:
        engine = TaskEngine(default_page_size=config.default_page_size)
    app.state.engine = engine

    def _get_engine() -> TaskEngine:
        return app.state.engine

    @app.exception_handler(TaskApiError)
    async def task_error_handler(request: Request, exc: TaskApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.get("/", response_model=ServiceInfo)
    async def root() -> ServiceInfo:
        """Root endpoint."""
        return ServiceInfo(name=SERVICE_NAME, version=SERVICE_VERSION, status="running")

    app.include_router(create_task_router(_get_engine))
    return app
