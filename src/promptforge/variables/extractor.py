"""Placeholder extraction from template text."""

import re
from typing import List

from ..core.types import Variable

OPEN_MARKER = "{{"
CLOSE_MARKER = "}}"

# Non-greedy so back-to-back placeholders on one line match independently
PLACEHOLDER_PATTERN = re.compile(r"\{\{(.*?)\}\}")


def extract_variable_names(text: str) -> List[str]:
    """
    Extract distinct placeholder names in first-occurrence order.

    Each ``{{ ... }}`` match is trimmed to its canonical name. Empty
    names are dropped and later duplicates collapse onto the first.
    Non-text input yields an empty list.

    Args:
        text: Raw template text

    Returns:
        Ordered list of unique variable names

    Example:
        >>> extract_variable_names("Hi {{name}}, your {{name}} is due {{ due }}")
        ['name', 'due']
    """
    if not isinstance(text, str):
        return []

    names: List[str] = []
    seen = set()

    for match in PLACEHOLDER_PATTERN.finditer(text):
        name = match.group(1).strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)

    return names


def extract_variables(text: str) -> List[Variable]:
    """Extract placeholders as empty-valued slots."""
    return [Variable(name=name) for name in extract_variable_names(text)]
