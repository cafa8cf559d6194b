"""Provide the public `task_manager_api` package exports."""

from __future__ import annotations

from .server import create_app

__all__ = ["create_app"]
