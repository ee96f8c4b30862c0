"""Value reconciliation for variable slots across template edits and switches."""

import logging
from typing import Iterable, List, Optional, Sequence

from ..core.types import Variable
from .cache import VariableCache
from .extractor import extract_variable_names

logger = logging.getLogger(__name__)


def _normalize_slots(slots) -> List[Variable]:
    """Drop anything that is not a slot; treat a non-sequence as empty."""
    if not isinstance(slots, (list, tuple)):
        return []
    return [s for s in slots if isinstance(s, Variable)]


def reconcile(
    names: Sequence[str],
    previous: Optional[Iterable[Variable]],
    cache: VariableCache
) -> List[Variable]:
    """
    Attach values to freshly extracted names.

    Policy per name, in extraction order:
        1. A name present in ``previous`` keeps that slot's value.
        2. Otherwise the cached value is used, falling back to "".

    Args:
        names: Ordered names from the extractor
        previous: Slot list the session was holding before the change
        cache: Name-keyed value memory

    Returns:
        New slot list; ``previous`` is not modified
    """
    if not isinstance(names, (list, tuple)):
        names = []

    previous_values = {}
    for slot in _normalize_slots(previous):
        previous_values.setdefault(slot.name, slot.value)

    slots = []
    for name in names:
        if name in previous_values:
            value = previous_values[name] or ""
        else:
            value = cache.get(name, "")
        slots.append(Variable(name=name, value=value))

    return slots


class VariableReconciler:
    """
    Owns the live slot list of an editing session.

    The session host calls :meth:`refresh` after every text change and
    :meth:`set_value` on every value edit. The cache is injected so it
    can be shared with, or outlive, a single reconciler.

    Example:
        >>> reconciler = VariableReconciler()
        >>> reconciler.refresh("Summarize {{topic}}")
        [Variable(name='topic', value='')]
        >>> reconciler.set_value("topic", "tides")
        >>> reconciler.refresh("Explain {{topic}} to a child")
        [Variable(name='topic', value='tides')]
    """

    def __init__(self, cache: Optional[VariableCache] = None):
        self.cache = cache if cache is not None else VariableCache()
        self._slots: List[Variable] = []

    @property
    def slots(self) -> List[Variable]:
        """Current slots (copies; edit through :meth:`set_value`)."""
        return [Variable(name=s.name, value=s.value) for s in self._slots]

    @property
    def values(self) -> dict:
        """Current slots as a name -> value mapping."""
        return {s.name: s.value for s in self._slots}

    def refresh(self, text: str) -> List[Variable]:
        """Re-extract ``text`` and reconcile against the held slots."""
        return self.apply(extract_variable_names(text))

    def apply(self, names: Sequence[str]) -> List[Variable]:
        """Reconcile an already extracted name list against the held slots."""
        self._slots = reconcile(names, self._slots, self.cache)
        logger.debug("Reconciled %d slot(s): %s", len(self._slots), [s.name for s in self._slots])
        return self.slots

    def set_value(self, name: str, value: str) -> None:
        """
        Record a user edit.

        Updates the matching live slot and always writes the cache, so
        the value follows ``name`` into the next template that uses it.
        """
        for slot in self._slots:
            if slot.name == name:
                slot.value = value
        self.cache.set(name, value)

    def clear_values(self) -> None:
        """Blank every current slot and forget exactly those names."""
        names = [slot.name for slot in self._slots]
        for slot in self._slots:
            slot.value = ""
        self.cache.remove_many(names)
        logger.debug("Cleared values for %s", names)

    def reset(self) -> None:
        """Drop all slots (the cache is kept)."""
        self._slots = []
