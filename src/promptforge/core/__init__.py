"""Core module - foundational types, configuration, and errors."""

from .types import (
    Template,
    Variable,
    ModelTier,
    MessageRole,
    ChatMessage,
    GenerationResult,
    OptimizationResult,
)
from .config import Settings, get_settings, reload_settings
from .exceptions import (
    PromptForgeError,
    ProviderError,
    ConfigurationError,
    TemplateError,
    TemplateNotFoundError,
    StoreError,
    OptimizationError,
)
from .logging import configure_logging
from .registry import ProviderEntry, ProviderRegistry, provider_registry

__all__ = [
    # Types
    "Template",
    "Variable",
    "ModelTier",
    "MessageRole",
    "ChatMessage",
    "GenerationResult",
    "OptimizationResult",
    # Configuration
    "Settings",
    "get_settings",
    "reload_settings",
    "configure_logging",
    # Exceptions
    "PromptForgeError",
    "ProviderError",
    "ConfigurationError",
    "TemplateError",
    "TemplateNotFoundError",
    "StoreError",
    "OptimizationError",
    # Registry
    "ProviderEntry",
    "ProviderRegistry",
    "provider_registry",
]
