"""Core type definitions for the prompt authoring system."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum
import time
import uuid


class ModelTier(Enum):
    """Model selection tier offered to the user."""
    FLASH = "flash"                # Fast tier
    PRO = "pro"                    # High-capability tier
    THINKING_PRO = "thinking_pro"  # High-capability tier with a reasoning budget


class MessageRole(Enum):
    """Role of an entry in the chat transcript."""
    USER = "user"
    MODEL = "model"
    ERROR = "error"


@dataclass
class Template:
    """
    A prompt template.

    Built-in templates are seed data and never change; user templates
    carry ids prefixed with ``custom_`` and are the only ones persisted.
    """
    id: str
    name: str
    content: str
    description: str = ""
    category: str = "Custom"
    tags: List[str] = field(default_factory=list)

    CUSTOM_PREFIX = "custom_"

    @property
    def is_custom(self) -> bool:
        """Whether this is a user-created template."""
        return self.id.startswith(self.CUSTOM_PREFIX)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted dictionary shape."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "content": self.content,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        """Create from dictionary format."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            content=data.get("content", ""),
            description=data.get("description", ""),
            category=data.get("category", "Custom"),
            tags=list(data.get("tags", [])),
        )


@dataclass
class Variable:
    """A variable slot: a placeholder name and its current value."""
    name: str
    value: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass
class GenerationResult:
    """Result of sending a prompt to a model."""
    text: str
    model: str
    duration: float  # milliseconds
    tokens: Optional[int] = None

    EMPTY_TEXT = "No text generated."


@dataclass
class OptimizationResult:
    """Result of a prompt optimization round trip."""
    original: str
    optimized: str
    reasoning: str = ""

    @property
    def changed(self) -> bool:
        return self.original != self.optimized


@dataclass
class ChatMessage:
    """An entry in the chat transcript."""
    role: MessageRole
    text: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: float = field(default_factory=time.time)

    def to_provider_format(self) -> Dict[str, str]:
        """Convert to the ``{"role", "content"}`` shape providers accept."""
        role = "assistant" if self.role == MessageRole.MODEL else self.role.value
        return {"role": role, "content": self.text}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role.value,
            "text": self.text,
            "timestamp": self.timestamp,
        }
