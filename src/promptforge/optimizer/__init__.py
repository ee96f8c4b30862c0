"""Prompt optimization through an LLM meta-prompt."""

from .optimizer import PromptOptimizer, META_PROMPT

__all__ = [
    "PromptOptimizer",
    "META_PROMPT",
]
