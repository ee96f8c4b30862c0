"""LiteLLM adapter for universal provider support."""

import logging
from dataclasses import replace
from typing import List, Dict, Any, AsyncIterator, Union

from .base import LLMProvider, LLMConfig, LLMResponse
from .tiers import TierSpec, resolve_tier
from ..core.registry import provider_registry
from ..core.exceptions import ProviderError, ConfigurationError
from ..core.types import ModelTier

logger = logging.getLogger(__name__)


@provider_registry.register("litellm", aliases=["universal", "any"])
class LiteLLMProvider(LLMProvider):
    """
    Universal provider using LiteLLM.

    Tiers resolve to the same Gemini models as the native provider,
    routed as ``gemini/<model>``. Set ``extra["model_prefix"]`` to route
    them through another LiteLLM backend (e.g. ``vertex_ai/``).
    """

    DEFAULT_PREFIX = "gemini/"

    def __init__(self, config: LLMConfig):
        super().__init__(config)

    def _validate(self) -> None:
        """Validate LiteLLM is available."""
        try:
            import litellm
            self._litellm = litellm
        except ImportError:
            raise ConfigurationError(
                "LiteLLM is required for universal provider support. "
                "Install with: pip install litellm",
                config_key="litellm"
            )

    def resolve_tier(self, tier: Union[str, ModelTier]) -> TierSpec:
        tier_spec = resolve_tier(tier)
        prefix = self.config.extra.get("model_prefix", self.DEFAULT_PREFIX)
        return replace(tier_spec, model=f"{prefix}{tier_spec.model}")

    def _request_kwargs(self, **kwargs) -> Dict[str, Any]:
        request: Dict[str, Any] = {
            "model": kwargs.get("model") or self.config.model,
            "api_key": self.config.api_key,
            "base_url": self.config.base_url,
            "timeout": self.config.timeout,
        }
        temperature = kwargs.get("temperature", self.config.temperature)
        if temperature is not None:
            request["temperature"] = temperature
        max_tokens = kwargs.get("max_tokens", self.config.max_tokens)
        if max_tokens is not None:
            request["max_tokens"] = max_tokens
        thinking_budget = kwargs.get("thinking_budget")
        if thinking_budget is not None:
            request["thinking"] = {"type": "enabled", "budget_tokens": thinking_budget}
        return request

    async def complete(
        self,
        messages: List[Dict[str, str]],
        **kwargs
    ) -> LLMResponse:
        """Generate a completion using LiteLLM."""
        request = self._request_kwargs(**kwargs)
        try:
            response = await self._litellm.acompletion(messages=messages, **request)
        except Exception as e:
            logger.error("LiteLLM request failed: %s", e)
            raise ProviderError(
                f"LiteLLM request failed: {str(e)}",
                provider="litellm",
                cause=e
            )

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=response.model,
            usage={
                "prompt_tokens": getattr(usage, "prompt_tokens", 0),
                "completion_tokens": getattr(usage, "completion_tokens", 0),
                "total_tokens": getattr(usage, "total_tokens", 0),
            },
            finish_reason=response.choices[0].finish_reason,
            raw_response=response
        )

    async def complete_stream(
        self,
        messages: List[Dict[str, str]],
        **kwargs
    ) -> AsyncIterator[str]:
        """Stream a completion using LiteLLM."""
        request = self._request_kwargs(**kwargs)
        try:
            response = await self._litellm.acompletion(messages=messages, stream=True, **request)

            async for chunk in response:
                content = getattr(chunk.choices[0].delta, "content", None)
                if content:
                    yield content
        except Exception as e:
            raise ProviderError(
                f"LiteLLM streaming failed: {str(e)}",
                provider="litellm",
                cause=e
            )

    @property
    def provider_name(self) -> str:
        return "litellm"
