"""Name-keyed memory of variable values."""

from typing import Dict, Iterable, Optional


class VariableCache:
    """
    Remembers the last value typed for each variable name.

    Lets a value follow its name across templates. The cache is a
    memory aid only: the reconciler never lets it override a value
    that is already live in the session. Unbounded, no expiry,
    last write wins.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, name: str, default: str = "") -> str:
        value = self._values.get(name)
        # Falsy entries fall back, matching how the reconciler seeds slots
        return value if value else default

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def remove(self, name: str) -> None:
        self._values.pop(name, None)

    def remove_many(self, names: Iterable[str]) -> None:
        for name in names:
            self._values.pop(name, None)

    def clear(self) -> None:
        self._values.clear()

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the cached values."""
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"VariableCache({self._values!r})"
