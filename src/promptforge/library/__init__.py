"""Template library: seed templates and user template persistence."""

from .builtin import BUILTIN_TEMPLATES, builtin_templates
from .store import TemplateStore, MemoryTemplateStore, JsonFileTemplateStore
from .manager import (
    TemplateLibrary,
    LibraryConfig,
    create_library,
    library_from_settings,
)

__all__ = [
    "BUILTIN_TEMPLATES",
    "builtin_templates",
    "TemplateStore",
    "MemoryTemplateStore",
    "JsonFileTemplateStore",
    "TemplateLibrary",
    "LibraryConfig",
    "create_library",
    "library_from_settings",
]
