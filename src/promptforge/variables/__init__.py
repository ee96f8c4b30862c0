"""Variable extraction, reconciliation, and interpolation."""

from .extractor import (
    extract_variable_names,
    extract_variables,
    PLACEHOLDER_PATTERN,
    OPEN_MARKER,
    CLOSE_MARKER,
)
from .cache import VariableCache
from .reconciler import VariableReconciler, reconcile
from .interpolator import interpolate, find_unfilled, placeholder_pattern

__all__ = [
    "extract_variable_names",
    "extract_variables",
    "PLACEHOLDER_PATTERN",
    "OPEN_MARKER",
    "CLOSE_MARKER",
    "VariableCache",
    "VariableReconciler",
    "reconcile",
    "interpolate",
    "find_unfilled",
    "placeholder_pattern",
]
