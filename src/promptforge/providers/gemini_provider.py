"""Google Gemini provider implementation."""

import json
import logging
from typing import List, Dict, Any, AsyncIterator, Optional, Tuple

import httpx

from .base import LLMProvider, LLMConfig, LLMResponse
from ..core.registry import provider_registry
from ..core.exceptions import ProviderError, ConfigurationError

logger = logging.getLogger(__name__)


@provider_registry.register("gemini", aliases=["google"], requires_key=True)
class GeminiProvider(LLMProvider):
    """Gemini provider over the Generative Language REST API."""

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(self, config: LLMConfig, client: Optional[httpx.AsyncClient] = None):
        super().__init__(config)
        self._client = client

    def _validate(self) -> None:
        """Validate Gemini configuration."""
        if not self.config.api_key:
            raise ConfigurationError(
                "Gemini API key is required",
                config_key="gemini_api_key"
            )

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url or self.DEFAULT_BASE_URL,
                headers={
                    "x-goog-api-key": self.config.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.config.timeout
            )
        return self._client

    def _convert_messages(
        self,
        messages: List[Dict[str, str]]
    ) -> Tuple[Optional[str], List[Dict[str, Any]]]:
        """
        Convert OpenAI-style messages to Gemini contents.

        Returns (system_instruction, contents)
        """
        system = None
        contents = []

        for msg in messages:
            if msg["role"] == "system":
                system = msg["content"]
                continue
            role = "model" if msg["role"] in ("assistant", "model") else "user"
            contents.append({"role": role, "parts": [{"text": msg["content"]}]})

        return system, contents

    def _build_request(self, messages: List[Dict[str, str]], **kwargs) -> Dict[str, Any]:
        system, contents = self._convert_messages(messages)
        request_data: Dict[str, Any] = {"contents": contents}

        if system:
            request_data["systemInstruction"] = {"parts": [{"text": system}]}

        generation_config: Dict[str, Any] = {}
        temperature = kwargs.get("temperature", self.config.temperature)
        if temperature is not None:
            generation_config["temperature"] = temperature
        max_tokens = kwargs.get("max_tokens", self.config.max_tokens)
        if max_tokens is not None:
            generation_config["maxOutputTokens"] = max_tokens
        thinking_budget = kwargs.get("thinking_budget")
        if thinking_budget is not None:
            generation_config["thinkingConfig"] = {"thinkingBudget": thinking_budget}

        if generation_config:
            request_data["generationConfig"] = generation_config
        return request_data

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> Tuple[str, Optional[str]]:
        """Join visible text parts of the first candidate (thought parts skipped)."""
        candidates = data.get("candidates") or []
        if not candidates:
            return "", None

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(
            part.get("text", "") for part in parts
            if not part.get("thought")
        )
        return text, candidate.get("finishReason")

    async def complete(
        self,
        messages: List[Dict[str, str]],
        **kwargs
    ) -> LLMResponse:
        """Generate a completion using the Gemini API."""
        client = self._get_client()
        model = kwargs.get("model") or self.config.model
        request_data = self._build_request(messages, **kwargs)

        try:
            response = await client.post(f"/models/{model}:generateContent", json=request_data)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Gemini generation error (%s): %s", e.response.status_code, e.response.text)
            raise ProviderError(
                f"Gemini API error: {e.response.text}",
                provider="gemini",
                status_code=e.response.status_code,
                cause=e
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Gemini request failed: %s", e)
            raise ProviderError(
                f"Gemini request failed: {str(e)}",
                provider="gemini",
                cause=e
            )

        content, finish_reason = self._extract_text(data)
        usage = data.get("usageMetadata", {})

        return LLMResponse(
            content=content,
            model=data.get("modelVersion", model),
            usage={
                "prompt_tokens": usage.get("promptTokenCount", 0),
                "completion_tokens": usage.get("candidatesTokenCount", 0),
                "total_tokens": usage.get("totalTokenCount", 0),
            },
            finish_reason=finish_reason,
            raw_response=data
        )

    async def complete_stream(
        self,
        messages: List[Dict[str, str]],
        **kwargs
    ) -> AsyncIterator[str]:
        """Stream a completion using the Gemini API."""
        client = self._get_client()
        model = kwargs.get("model") or self.config.model
        request_data = self._build_request(messages, **kwargs)

        try:
            async with client.stream(
                "POST",
                f"/models/{model}:streamGenerateContent",
                params={"alt": "sse"},
                json=request_data
            ) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    try:
                        event = json.loads(line[6:])
                    except json.JSONDecodeError:
                        continue
                    text, _ = self._extract_text(event)
                    if text:
                        yield text
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"Gemini streaming error: {e.response.status_code}",
                provider="gemini",
                status_code=e.response.status_code,
                cause=e
            )

    @property
    def provider_name(self) -> str:
        return "gemini"

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
