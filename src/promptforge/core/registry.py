"""Name-based lookup of LLM provider classes."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type


@dataclass
class ProviderEntry:
    """A registered provider class and how to find it."""
    name: str
    cls: Type
    aliases: List[str] = field(default_factory=list)
    description: str = ""
    requires_key: bool = False


class ProviderRegistry:
    """
    Registry of provider classes keyed by name.

    Provider modules register themselves on import; callers build
    instances by name (or alias) without importing the class.

    Usage:
        @provider_registry.register("gemini", aliases=["google"])
        class GeminiProvider(LLMProvider):
            ...

        provider = provider_registry.create("google", config)
    """

    def __init__(self):
        self._entries: Dict[str, ProviderEntry] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        aliases: Optional[List[str]] = None,
        description: str = "",
        requires_key: bool = False
    ) -> Callable[[Type], Type]:
        """Class decorator form of :meth:`add`."""
        def decorator(cls: Type) -> Type:
            self.add(name, cls, aliases, description, requires_key)
            return cls
        return decorator

    def add(
        self,
        name: str,
        cls: Type,
        aliases: Optional[List[str]] = None,
        description: str = "",
        requires_key: bool = False
    ) -> None:
        """Register ``cls`` under ``name``; re-registering a name replaces it."""
        if name in self._entries:
            self.remove(name)

        entry = ProviderEntry(
            name=name,
            cls=cls,
            aliases=list(aliases or []),
            description=description or (cls.__doc__ or "").strip().split("\n")[0],
            requires_key=requires_key,
        )
        self._entries[name] = entry
        for alias in entry.aliases:
            self._aliases[alias] = name

    def remove(self, name: str) -> None:
        """Forget a provider and its aliases."""
        entry = self._entries.pop(self.resolve(name), None)
        if entry is None:
            return
        for alias in entry.aliases:
            self._aliases.pop(alias, None)

    def resolve(self, name: str) -> str:
        """Canonical name for ``name`` (aliases map to their target)."""
        return self._aliases.get(name, name)

    def entry(self, name: str) -> ProviderEntry:
        """
        Look up a provider by name or alias.

        Raises:
            KeyError: If nothing is registered under ``name``
        """
        resolved = self.resolve(name)
        if resolved not in self._entries:
            raise KeyError(
                f"Unknown provider '{name}'. Available: {self.names()}"
            )
        return self._entries[resolved]

    def create(self, name: str, config: Any, **kwargs) -> Any:
        """Instantiate a provider with its config."""
        return self.entry(name).cls(config, **kwargs)

    def names(self) -> List[str]:
        """Canonical names in registration order."""
        return list(self._entries)

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) in self._entries

    def configured(self, api_keys: Dict[str, Optional[str]]) -> List[str]:
        """
        Names of providers usable with the given keys.

        Providers that need no key of ours (e.g. LiteLLM, which reads
        its own environment) are always included.
        """
        return [
            entry.name for entry in self._entries.values()
            if not entry.requires_key or api_keys.get(entry.name)
        ]


# Global registry instance
provider_registry = ProviderRegistry()
