"""Template library: seed templates merged with saved user templates."""

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.exceptions import TemplateError, TemplateNotFoundError
from ..core.types import Template
from .builtin import builtin_templates
from .store import TemplateStore, MemoryTemplateStore, JsonFileTemplateStore

logger = logging.getLogger(__name__)


@dataclass
class LibraryConfig:
    """Configuration for the template library."""
    storage_path: Optional[str] = None  # None = in-memory
    include_builtin: bool = True


class TemplateLibrary:
    """
    Catalogue of templates available to an editing session.

    Seed templates come first and are read-only. Saved user templates
    follow, minus any whose id collides with a seed id. Only user
    templates (``custom_`` ids) are ever written to the store.
    """

    DEFAULT_TAGS = ["custom"]

    def __init__(
        self,
        store: Optional[TemplateStore] = None,
        include_builtin: bool = True
    ):
        """
        Initialize the library.

        Args:
            store: Persistence backend for user templates (defaults to in-memory)
            include_builtin: Whether to offer the seed templates
        """
        self.store = store or MemoryTemplateStore()
        self._builtin = builtin_templates() if include_builtin else []
        builtin_ids = {t.id for t in self._builtin}

        saved = self.store.load_all()
        self._custom: List[Template] = [t for t in saved if t.id not in builtin_ids]
        if len(self._custom) != len(saved):
            logger.warning(
                "Ignored %d saved template(s) shadowing built-in ids",
                len(saved) - len(self._custom)
            )

    # Queries
    def list_templates(self) -> List[Template]:
        """All templates: seed set first, then user templates."""
        return self._builtin + self._custom

    def get(self, template_id: str) -> Template:
        """
        Get a template by id.

        Raises:
            TemplateNotFoundError: If no template has this id
        """
        for template in self.list_templates():
            if template.id == template_id:
                return template
        raise TemplateNotFoundError(template_id)

    def exists(self, template_id: str) -> bool:
        return any(t.id == template_id for t in self.list_templates())

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        seen: Dict[str, None] = {}
        for template in self.list_templates():
            seen.setdefault(template.category, None)
        return list(seen)

    def by_category(self) -> Dict[str, List[Template]]:
        """Templates grouped by category, groups in first-seen order."""
        groups: Dict[str, List[Template]] = {c: [] for c in self.categories()}
        for template in self.list_templates():
            groups[template.category].append(template)
        return groups

    def search(self, query: str) -> List[Template]:
        """Case-insensitive match against name, description, and tags."""
        needle = query.strip().lower()
        if not needle:
            return self.list_templates()
        return [
            t for t in self.list_templates()
            if needle in t.name.lower()
            or needle in t.description.lower()
            or any(needle in tag.lower() for tag in t.tags)
        ]

    # Mutations
    def save(
        self,
        content: str,
        name: str,
        description: str = "",
        category: str = "Custom",
        template_id: Optional[str] = None
    ) -> Template:
        """
        Save template text as a user template.

        Updates ``template_id`` in place when it names an existing user
        template (tags are kept). Anything else, including a seed id,
        creates a new ``custom_<ms>`` template tagged ``custom``.

        Returns:
            The saved template

        Raises:
            TemplateError: If content, name, or category is blank
        """
        if not content or not content.strip():
            raise TemplateError("Cannot save an empty template", template_id=template_id)
        if not name or not name.strip():
            raise TemplateError("Template name is required", template_id=template_id)
        if not category or not category.strip():
            raise TemplateError("Template category is required", template_id=template_id)

        existing = self._find_custom(template_id) if template_id else None

        if existing is not None:
            updated = Template(
                id=existing.id,
                name=name,
                description=description,
                category=category,
                content=content,
                tags=list(existing.tags) or list(self.DEFAULT_TAGS),
            )
            custom = [updated if t.id == existing.id else t for t in self._custom]
            action = "Updated"
        else:
            updated = Template(
                id=self._new_id(),
                name=name,
                description=description,
                category=category,
                content=content,
                tags=list(self.DEFAULT_TAGS),
            )
            custom = self._custom + [updated]
            action = "Created"

        self._commit(custom)
        logger.info("%s template %s (%s)", action, updated.id, updated.name)
        return updated

    def delete(self, template_id: str) -> Template:
        """
        Delete a user template.

        Raises:
            TemplateError: If the id names a built-in template
            TemplateNotFoundError: If no template has this id
        """
        if any(t.id == template_id for t in self._builtin):
            raise TemplateError("Built-in templates cannot be deleted", template_id=template_id)

        target = self._find_custom(template_id)
        if target is None:
            raise TemplateNotFoundError(template_id)

        self._commit([t for t in self._custom if t.id != template_id])
        logger.info("Deleted template %s", template_id)
        return target

    # Internals
    def _find_custom(self, template_id: str) -> Optional[Template]:
        for template in self._custom:
            if template.id == template_id:
                return template
        return None

    def _new_id(self) -> str:
        stamp = int(time.time() * 1000)
        while self.exists(f"{Template.CUSTOM_PREFIX}{stamp}"):
            stamp += 1
        return f"{Template.CUSTOM_PREFIX}{stamp}"

    def _commit(self, custom: List[Template]) -> None:
        """Write ``custom`` to the store, then adopt it; a failed write changes nothing."""
        self.store.save_all([t for t in custom if t.is_custom])
        self._custom = custom


def create_library(
    storage_path: Optional[str] = None,
    include_builtin: bool = True
) -> TemplateLibrary:
    """
    Create a template library.

    Args:
        storage_path: Directory for saved templates (None for in-memory)
        include_builtin: Whether to offer the seed templates

    Returns:
        Configured TemplateLibrary
    """
    config = LibraryConfig(storage_path=storage_path, include_builtin=include_builtin)
    store = JsonFileTemplateStore(config.storage_path) if config.storage_path else MemoryTemplateStore()
    return TemplateLibrary(store=store, include_builtin=config.include_builtin)


def library_from_settings() -> TemplateLibrary:
    """Create a library from the global settings."""
    from ..core.config import get_settings
    settings = get_settings().library

    if settings.storage_backend == "memory":
        return create_library()
    return create_library(storage_path=settings.storage_path)
