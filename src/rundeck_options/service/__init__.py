"""Rundeck option service and its HTTP server."""

from .options import ContentResult, RundeckOptionsService

__all__ = [
    "ContentResult",
    "RundeckOptionsService",
]
