"""API route factories."""

from .capture import create_capture_router
from .control import create_control_router
from .observability import create_observability_router

__all__ = [
    "create_capture_router",
    "create_control_router",
    "create_observability_router",
]
