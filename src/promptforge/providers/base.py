"""Abstract LLM provider interface."""

import time
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, AsyncIterator, Union
from dataclasses import dataclass, field

from ..core.types import GenerationResult, ModelTier
from .tiers import TierSpec, resolve_tier


@dataclass
class LLMConfig:
    """Configuration for LLM providers."""
    model: str = "gemini-2.5-flash"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    timeout: float = 60.0
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LLMResponse:
    """Standardized LLM response across providers."""
    content: str
    model: str
    usage: Dict[str, int]  # prompt_tokens, completion_tokens, total_tokens
    finish_reason: Optional[str] = None
    raw_response: Any = None

    @property
    def total_tokens(self) -> int:
        return self.usage.get("total_tokens", 0)


class LLMProvider(ABC):
    """
    Abstract LLM provider interface.

    All provider implementations must inherit from this class
    and implement the required methods.
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._validate()

    @abstractmethod
    def _validate(self) -> None:
        """Validate provider configuration. Raises ConfigurationError if invalid."""
        pass

    @abstractmethod
    async def complete(
        self,
        messages: List[Dict[str, str]],
        **kwargs
    ) -> LLMResponse:
        """
        Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content'
            **kwargs: Additional options (model, thinking_budget, ...)

        Returns:
            LLMResponse with completion
        """
        pass

    @abstractmethod
    async def complete_stream(
        self,
        messages: List[Dict[str, str]],
        **kwargs
    ) -> AsyncIterator[str]:
        """
        Stream a completion for the given messages.

        Yields:
            Content chunks as they arrive
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name for identification."""
        pass

    @property
    def model_name(self) -> str:
        """Return the current model name."""
        return self.config.model

    def resolve_tier(self, tier: Union[str, ModelTier]) -> TierSpec:
        """Map a tier to this provider's model settings."""
        return resolve_tier(tier)

    async def generate(
        self,
        messages: Union[str, List[Dict[str, str]]],
        tier: Union[str, ModelTier] = ModelTier.FLASH,
        **kwargs
    ) -> GenerationResult:
        """
        Run a prompt (or a conversation) on the model behind ``tier``.

        Args:
            messages: Prompt text or message dicts
            tier: Model tier to use
            **kwargs: Passed through to :meth:`complete`

        Returns:
            GenerationResult with text and wall-clock duration in ms
        """
        if isinstance(messages, str):
            messages = [{"role": "user", "content": messages}]

        tier_spec = self.resolve_tier(tier)
        start = time.perf_counter()
        response = await self.complete(
            messages,
            model=tier_spec.model,
            thinking_budget=tier_spec.thinking_budget,
            **kwargs
        )
        duration = (time.perf_counter() - start) * 1000

        return GenerationResult(
            text=response.content or GenerationResult.EMPTY_TEXT,
            model=response.model or tier_spec.model,
            duration=duration,
            tokens=response.total_tokens or None,
        )

    async def close(self) -> None:
        """Release any held network resources."""
        return None
