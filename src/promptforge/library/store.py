"""Persistence backends for user templates."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from ..core.exceptions import StoreError
from ..core.types import Template

logger = logging.getLogger(__name__)


class TemplateStore:
    """Abstract backend for user template storage."""

    def load_all(self) -> List[Template]:
        raise NotImplementedError

    def save_all(self, templates: List[Template]) -> None:
        raise NotImplementedError


class MemoryTemplateStore(TemplateStore):
    """In-memory template store for testing and throwaway sessions."""

    def __init__(self):
        self._storage: Dict[str, dict] = {}

    def load_all(self) -> List[Template]:
        return [Template.from_dict(data) for data in self._storage.values()]

    def save_all(self, templates: List[Template]) -> None:
        self._storage = {t.id: t.to_dict() for t in templates}


class JsonFileTemplateStore(TemplateStore):
    """
    File-based template store.

    All user templates live in one JSON array, rewritten on every save.
    An unreadable, malformed, or non-array file loads as empty so a bad
    file never blocks the seed templates.
    """

    FILENAME = "custom_templates.json"

    def __init__(self, storage_dir: str):
        self.storage_dir = Path(storage_dir).expanduser()
        self.path = self.storage_dir / self.FILENAME

    def load_all(self) -> List[Template]:
        """Load user templates from file."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load saved templates from %s: %s", self.path, e)
            return []

        if not isinstance(data, list):
            logger.error("Ignoring %s: expected a JSON array", self.path)
            return []

        templates = []
        for entry in data:
            try:
                templates.append(Template.from_dict(entry))
            except (KeyError, TypeError, AttributeError):
                logger.warning("Skipping malformed template entry in %s", self.path)
        return templates

    def save_all(self, templates: List[Template]) -> None:
        """Write user templates to file."""
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([t.to_dict() for t in templates], f, indent=2)
        except OSError as e:
            raise StoreError(
                f"Failed to write templates: {e}",
                path=str(self.path),
                cause=e
            )
        logger.debug("Saved %d user template(s) to %s", len(templates), self.path)
