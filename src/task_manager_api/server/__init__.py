"""HTTP server for the task manager API."""

from .api import create_app

__all__ = ["create_app"]
