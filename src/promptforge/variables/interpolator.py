"""Substitution of slot values into template text."""

import re
from typing import Dict, Iterable, List, Pattern

from ..core.types import Variable
from .extractor import extract_variable_names


def placeholder_pattern(name: str) -> Pattern:
    """
    Build a matcher for ``{{ name }}`` with optional inner whitespace.

    The name is escaped, so regex-special characters match literally.
    """
    return re.compile(r"\{\{\s*" + re.escape(name) + r"\s*\}\}")


def _slot_values(slots: Iterable[Variable]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for slot in slots or []:
        if isinstance(slot, Variable) and slot.name not in values:
            values[slot.name] = slot.value or ""
    return values


def interpolate(text: str, slots: Iterable[Variable]) -> str:
    """
    Replace every placeholder that names a known slot with its value.

    All slots are matched in a single scan of the original text, so a
    value that itself looks like ``{{other}}`` is inserted as-is and
    never expanded. Values are inserted literally (no backreferences).
    Placeholders without a slot are left untouched.

    Where placeholders overlap, the leftmost match in the text wins
    regardless of slot order: with slots ``y`` and ``{{y``, the text
    ``{{ {{y}} }}`` matches ``{{ {{y}}`` first. Applying slots one at
    a time would instead fill the inner ``{{y}}``.

    Args:
        text: Raw template text
        slots: Final slot list; the first slot wins for repeated names

    Returns:
        The substituted text

    Example:
        >>> interpolate("A: {{a}}, B: {{ b }}", [Variable("a", "1"), Variable("b", "2")])
        'A: 1, B: 2'
    """
    if not isinstance(text, str):
        return ""

    values = _slot_values(slots)
    if not values:
        return text

    alternatives = "|".join(re.escape(name) for name in values)
    pattern = re.compile(r"\{\{\s*(" + alternatives + r")\s*\}\}")

    return pattern.sub(lambda m: values[m.group(1)], text)


def find_unfilled(text: str, slots: Iterable[Variable]) -> List[str]:
    """
    List placeholder names that interpolation would not fill.

    A name counts as unfilled when no slot carries it or its slot value
    is empty. Order follows first occurrence in ``text``.
    """
    values = _slot_values(slots)
    return [
        name for name in extract_variable_names(text)
        if not values.get(name)
    ]
