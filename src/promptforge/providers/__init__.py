"""LLM Provider abstractions for provider-agnostic design."""

from .base import LLMProvider, LLMConfig, LLMResponse
from .tiers import TierSpec, TIER_MODELS, THINKING_BUDGET, default_tier, resolve_tier
from ..core.registry import provider_registry

__all__ = [
    "LLMProvider",
    "LLMConfig",
    "LLMResponse",
    "TierSpec",
    "TIER_MODELS",
    "THINKING_BUDGET",
    "resolve_tier",
    "default_tier",
    "get_provider",
    "list_providers",
    "provider_registry",
]


def get_provider(name: str = None, **kwargs) -> LLMProvider:
    """
    Get a configured LLM provider instance.

    Args:
        name: Provider name ("gemini", "litellm"); defaults to settings
        **kwargs: Provider-specific configuration

    Returns:
        Configured LLMProvider instance
    """
    from ..core.config import get_settings
    settings = get_settings()
    name = name or settings.provider.default_provider

    config_kwargs = {
        "model": resolve_tier(default_tier()).model,
        "timeout": settings.provider.timeout,
        "base_url": settings.provider.base_url,
    }

    if provider_registry.resolve(name) == "gemini":
        config_kwargs["api_key"] = settings.provider.gemini_api_key

    config_kwargs.update(kwargs)
    config = LLMConfig(**config_kwargs)

    return provider_registry.create(name, config)


def list_providers() -> list:
    """List all available providers."""
    return provider_registry.names()


# Import providers to register them
from . import gemini_provider, litellm_adapter
