"""API routes."""

from .templates import router as templates_router
from .variables import router as variables_router
from .run import router as run_router
from .health import router as health_router

__all__ = [
    "templates_router",
    "variables_router",
    "run_router",
    "health_router",
]
