"""Editing session host."""

from .editor import EditingSession

__all__ = ["EditingSession"]
