"""CLI commands."""

from .templates import list_templates, show, save, delete
from .prompts import fill, run, optimize

__all__ = [
    "list_templates",
    "show",
    "save",
    "delete",
    "fill",
    "run",
    "optimize",
]
