"""
PromptForge - prompt templates with {{variables}}, filled and run against an LLM

Basic Usage:
    >>> from promptforge import PromptForge
    >>> pf = PromptForge()
    >>>
    >>> # Inspect a template's variables
    >>> pf.extract("Explain {{topic}} to {{ audience }}")
    ['topic', 'audience']
    >>>
    >>> # Fill a template
    >>> pf.fill("t4", topic="photosynthesis")
    >>>
    >>> # Run a filled prompt
    >>> result = await pf.run("Summarize {{text}}", text="...")
    >>> print(result.text)
    >>>
    >>> # Interactive editing with values that follow their names
    >>> session = pf.session()
    >>> _ = session.select_template("t6")
    >>> session.set_value("complex_topic", "black holes")

For more control, use the individual modules:
    - promptforge.variables: Extraction, reconciliation, interpolation
    - promptforge.library: Built-in and saved templates
    - promptforge.session: Editing session host
    - promptforge.optimizer: LLM prompt optimizer
    - promptforge.providers: Gemini and LiteLLM providers
    - promptforge.api: REST API server
    - promptforge.cli: Command-line interface
"""

import asyncio
from typing import Optional, Dict, List, Union

from .core.types import (
    Template,
    Variable,
    ModelTier,
    MessageRole,
    ChatMessage,
    GenerationResult,
    OptimizationResult,
)
from .core.exceptions import (
    PromptForgeError,
    ProviderError,
    ConfigurationError,
    TemplateError,
    TemplateNotFoundError,
    StoreError,
    OptimizationError,
)
from .providers.base import LLMProvider
from .providers.tiers import default_tier
from .variables import (
    VariableCache,
    VariableReconciler,
    extract_variable_names,
    interpolate,
    find_unfilled,
)
from .library import TemplateLibrary, create_library
from .session import EditingSession
from .optimizer import PromptOptimizer


__version__ = "1.0.0"
__all__ = [
    # Main class
    "PromptForge",
    # Core types
    "Template",
    "Variable",
    "ModelTier",
    "MessageRole",
    "ChatMessage",
    "GenerationResult",
    "OptimizationResult",
    # Exceptions
    "PromptForgeError",
    "ProviderError",
    "ConfigurationError",
    "TemplateError",
    "TemplateNotFoundError",
    "StoreError",
    "OptimizationError",
    # Individual components (for advanced use)
    "VariableCache",
    "VariableReconciler",
    "TemplateLibrary",
    "EditingSession",
    "PromptOptimizer",
    "extract_variable_names",
    "interpolate",
    "find_unfilled",
]


class PromptForge:
    """
    Main interface for template filling and prompt runs.

    Example:
        >>> pf = PromptForge(storage_path="~/.promptforge")
        >>> text = pf.fill("t7", broken_code="...", error_message="...")
        >>> result = await pf.run(text, tier="pro")
    """

    def __init__(
        self,
        llm_provider: Optional[LLMProvider] = None,
        storage_path: Optional[str] = None,
        library: Optional[TemplateLibrary] = None,
    ):
        """
        Initialize PromptForge.

        Args:
            llm_provider: LLM provider (built from settings on first use if omitted)
            storage_path: Directory for saved templates (None for in-memory)
            library: Pre-built template library (overrides storage_path)
        """
        self._llm_provider = llm_provider
        self._storage_path = storage_path
        self._library = library
        self.cache = VariableCache()

    @property
    def library(self) -> TemplateLibrary:
        """Get or create the template library."""
        if self._library is None:
            self._library = create_library(storage_path=self._storage_path)
        return self._library

    @property
    def llm_provider(self) -> LLMProvider:
        """Get or create the LLM provider."""
        if self._llm_provider is None:
            from .providers import get_provider
            self._llm_provider = get_provider()
        return self._llm_provider

    # Variable methods
    def extract(self, text: str) -> List[str]:
        """Names of the placeholders in ``text``, in first-occurrence order."""
        return extract_variable_names(text)

    def interpolate(self, text: str, values: Optional[Dict[str, str]] = None, /, **kwargs) -> str:
        """
        Substitute values into template text.

        Values missing from ``values`` fall back to this instance's cache
        (values recorded by earlier calls), then to "". ``text`` and
        ``values`` are positional-only, so any name works as a keyword.
        """
        all_values = {**(values or {}), **kwargs}
        reconciler = VariableReconciler(self.cache)
        reconciler.refresh(text)
        for name, value in all_values.items():
            reconciler.set_value(name, value)
        return interpolate(text, reconciler.slots)

    def fill(self, template_id: str, values: Optional[Dict[str, str]] = None, /, **kwargs) -> str:
        """Interpolate a library template by id."""
        return self.interpolate(self.library.get(template_id).content, values, **kwargs)

    # Session
    def session(self, model_tier: Optional[Union[str, ModelTier]] = None) -> EditingSession:
        """
        Create an editing session sharing this instance's library and cache.

        Uses the provider given to this instance, if any. Without one the
        session can edit, fill, and save but not run or optimize. The tier
        defaults to PF_DEFAULT_TIER.
        """
        return EditingSession(
            library=self.library,
            provider=self._llm_provider,
            cache=self.cache,
            model_tier=model_tier,
        )

    # Template methods
    def list_templates(self) -> List[Template]:
        return self.library.list_templates()

    def get_template(self, template_id: str) -> Template:
        return self.library.get(template_id)

    def save_template(
        self,
        content: str,
        name: str,
        description: str = "",
        category: str = "Custom",
        template_id: Optional[str] = None,
    ) -> Template:
        """Save or update a user template."""
        return self.library.save(content, name, description, category, template_id)

    def delete_template(self, template_id: str) -> Template:
        return self.library.delete(template_id)

    # Model methods
    async def run(
        self,
        prompt: str,
        values: Optional[Dict[str, str]] = None,
        /,
        *,
        tier: Optional[Union[str, ModelTier]] = None,
        **kwargs
    ) -> GenerationResult:
        """
        Fill a prompt and send it to the model.

        Args:
            prompt: Template text
            values: Variable values
            tier: Model tier (flash, pro, thinking_pro); defaults to PF_DEFAULT_TIER
            **kwargs: Additional variable values (a variable named ``tier``
                must go through ``values``)

        Returns:
            GenerationResult with text and timing
        """
        text = self.interpolate(prompt, values, **kwargs)
        return await self.llm_provider.generate(text, tier=tier or default_tier())

    def run_sync(
        self,
        prompt: str,
        values: Optional[Dict[str, str]] = None,
        /,
        *,
        tier: Optional[Union[str, ModelTier]] = None,
        **kwargs
    ) -> GenerationResult:
        """Synchronous version of run."""
        return asyncio.run(self.run(prompt, values, tier=tier, **kwargs))

    async def optimize(self, prompt: str) -> OptimizationResult:
        """Rewrite a prompt for clarity, keeping its placeholders."""
        return await PromptOptimizer(self.llm_provider).optimize(prompt)

    def optimize_sync(self, prompt: str) -> OptimizationResult:
        """Synchronous version of optimize."""
        return asyncio.run(self.optimize(prompt))
