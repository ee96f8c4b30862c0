"""LLM round trip that rewrites a prompt for clarity."""

import logging
import re

from jinja2 import Environment, StrictUndefined

from ..core.exceptions import OptimizationError, ProviderError
from ..core.types import ModelTier, OptimizationResult
from ..providers.base import LLMProvider

logger = logging.getLogger(__name__)


META_PROMPT = """You are an Expert Prompt Engineer. Your goal is to optimize the following prompt for an LLM to ensure better clarity, adherence to constraints, and higher quality output.

ORIGINAL PROMPT:
"{{ original_prompt }}"

INSTRUCTIONS:
1. Analyze the original prompt's intent.
2. Identify ambiguities or weak instructions.
3. Rewrite the prompt using best practices (Chain of Thought, clear delimiters, role definition, etc.).
4. Maintain any variables (like {% raw %}{{variable}}{% endraw %}) present in the original.
5. Return ONLY the optimized prompt text. Do not add conversational filler."""


class PromptOptimizer:
    """
    Rewrites prompt text through a meta-prompt.

    Placeholders in the original are kept by instruction; the caller
    re-extracts variables from whatever comes back.
    """

    PREFIXES_TO_REMOVE = [
        "Here is the optimized prompt:",
        "Here's the optimized prompt:",
        "Optimized prompt:",
        "Here is the improved prompt:",
        "Improved prompt:",
    ]

    def __init__(
        self,
        llm_client: LLMProvider,
        tier: ModelTier = ModelTier.FLASH
    ):
        """
        Initialize the optimizer.

        Args:
            llm_client: LLM provider client
            tier: Model tier used for the rewrite
        """
        self.llm_client = llm_client
        self.tier = tier
        self._env = Environment(autoescape=False, undefined=StrictUndefined)
        self._template = self._env.from_string(META_PROMPT)

    def build_request(self, prompt: str) -> str:
        """Render the meta-prompt around ``prompt``."""
        return self._template.render(original_prompt=prompt)

    async def optimize(self, prompt: str) -> OptimizationResult:
        """
        Optimize a prompt.

        Args:
            prompt: The prompt text, placeholders included

        Returns:
            OptimizationResult; ``optimized`` equals ``original`` when the
            model returns nothing usable

        Raises:
            OptimizationError: If the provider call fails or the prompt is blank
        """
        if not prompt or not prompt.strip():
            raise OptimizationError("Nothing to optimize", stage="input")

        try:
            result = await self.llm_client.generate(self.build_request(prompt), tier=self.tier)
        except ProviderError as e:
            logger.error("Optimization error: %s", e)
            raise OptimizationError(
                "Failed to optimize prompt",
                stage="invoke",
                cause=e
            )

        raw = "" if result.text == result.EMPTY_TEXT else result.text
        optimized = self._clean_response(raw) or prompt

        logger.info(
            "Optimized prompt with %s in %.0fms (%d -> %d chars)",
            result.model, result.duration, len(prompt), len(optimized)
        )
        return OptimizationResult(original=prompt, optimized=optimized)

    def _clean_response(self, response: str) -> str:
        """Clean common LLM artifacts from the response."""
        cleaned = response.strip()

        # Markdown code fences
        cleaned = re.sub(r'^```\w*\n?', '', cleaned)
        cleaned = re.sub(r'\n?```$', '', cleaned)
        cleaned = cleaned.strip()

        # Triple quotes
        cleaned = re.sub(r'^["\']{3}\s*', '', cleaned)
        cleaned = re.sub(r'\s*["\']{3}$', '', cleaned)

        # Quotes wrapping the entire response
        if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
            cleaned = cleaned[1:-1].strip()

        for prefix in self.PREFIXES_TO_REMOVE:
            if cleaned.lower().startswith(prefix.lower()):
                cleaned = cleaned[len(prefix):].strip()
                break

        return cleaned
