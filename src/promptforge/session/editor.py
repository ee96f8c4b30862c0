"""Editing session: the host that sequences extraction, reconciliation, and runs."""

import logging
from typing import List, Optional, Union

from ..core.exceptions import PromptForgeError, ProviderError, TemplateError
from ..core.types import (
    ChatMessage,
    MessageRole,
    ModelTier,
    OptimizationResult,
    Template,
    Variable,
)
from ..library.manager import TemplateLibrary
from ..optimizer import PromptOptimizer
from ..providers.base import LLMProvider
from ..providers.tiers import default_tier
from ..variables import VariableCache, VariableReconciler, find_unfilled, interpolate

logger = logging.getLogger(__name__)


class EditingSession:
    """
    State of one prompt-editing session.

    Holds the template text, the selected template, the slot list, the
    variable cache, and the chat transcript. Every text change goes
    through :meth:`set_text`, which re-extracts placeholders and
    reconciles them against the slots still held, so values typed
    before an edit (or before a template switch) are carried over.

    Example:
        >>> session = EditingSession(TemplateLibrary())
        >>> _ = session.select_template("t4")
        >>> session.set_value("topic", "tides")
        >>> "tides" in session.interpolated_prompt()
        True
    """

    RUN_ERROR_TEXT = "Error running prompt. Ensure API Key is set and model is available."
    SEND_ERROR_TEXT = "Failed to send message."

    def __init__(
        self,
        library: TemplateLibrary,
        provider: Optional[LLMProvider] = None,
        cache: Optional[VariableCache] = None,
        model_tier: Optional[Union[str, ModelTier]] = None,
    ):
        """
        Initialize the session.

        Args:
            library: Template catalogue and store
            provider: LLM provider for run/send/optimize (optional)
            cache: Variable cache (a fresh one per session by default)
            model_tier: Initial model tier (default: PF_DEFAULT_TIER)
        """
        self.library = library
        self.provider = provider
        self.reconciler = VariableReconciler(cache)
        self.model_tier = ModelTier(model_tier) if model_tier else default_tier()

        self.text: str = ""
        self.selected_template_id: Optional[str] = None
        self.messages: List[ChatMessage] = []
        self._conversation_open = False

    # State accessors
    @property
    def cache(self) -> VariableCache:
        return self.reconciler.cache

    @property
    def slots(self) -> List[Variable]:
        return self.reconciler.slots

    @property
    def active_template(self) -> Optional[Template]:
        if self.selected_template_id and self.library.exists(self.selected_template_id):
            return self.library.get(self.selected_template_id)
        return None

    # Text and template selection
    def set_text(self, text: str) -> List[Variable]:
        """Replace the template text and reconcile its variables."""
        self.text = text if isinstance(text, str) else ""
        return self.reconciler.refresh(self.text)

    def select_template(self, template_id: str) -> Template:
        """
        Load a template into the editor.

        Raises:
            TemplateNotFoundError: If the id is unknown
        """
        template = self.library.get(template_id)
        self.set_text(template.content or "")
        self.selected_template_id = template.id
        logger.debug("Selected template %s", template.id)
        return template

    def new_prompt(self) -> None:
        """Start an empty, unsaved draft."""
        self.text = ""
        self.selected_template_id = None
        self.reconciler.reset()
        self.messages = []
        self._conversation_open = False

    def set_model_tier(self, tier: Union[str, ModelTier]) -> None:
        self.model_tier = ModelTier(tier)

    # Variable editing
    def set_value(self, name: str, value: str) -> None:
        """Record a value edit (also remembered across templates)."""
        self.reconciler.set_value(name, value)

    def set_values(self, values: dict) -> None:
        for name, value in values.items():
            self.reconciler.set_value(name, value)

    def clear_values(self) -> None:
        """Blank all current values and forget them."""
        self.reconciler.clear_values()

    def interpolated_prompt(self) -> str:
        """The current text with all known slots substituted."""
        return interpolate(self.text, self.reconciler.slots)

    def unfilled_variables(self) -> List[str]:
        return find_unfilled(self.text, self.reconciler.slots)

    # Library actions
    def save(self, name: str, description: str = "", category: str = "Custom") -> Template:
        """
        Save the current text.

        Updates the selected template when it is a user template;
        otherwise creates a new one and selects it.

        Raises:
            TemplateError: If the text is blank
        """
        if not self.text or not self.text.strip():
            raise TemplateError("Cannot save an empty prompt")

        selected = self.selected_template_id
        target_id = selected if selected and selected.startswith(Template.CUSTOM_PREFIX) else None

        template = self.library.save(
            content=self.text,
            name=name,
            description=description,
            category=category,
            template_id=target_id,
        )
        self.selected_template_id = template.id
        return template

    def delete(self, template_id: str) -> None:
        """Delete a user template, resetting the editor if it was selected."""
        self.library.delete(template_id)
        if self.selected_template_id == template_id:
            self.new_prompt()

    # Model actions
    def _require_provider(self) -> LLMProvider:
        if self.provider is None:
            raise PromptForgeError("No LLM provider configured for this session")
        return self.provider

    async def run(self) -> Optional[ChatMessage]:
        """
        Send the interpolated prompt as the opening turn of a new conversation.

        Provider failures are recorded as an ``error`` message; slots and
        cache are left as they were.

        Returns:
            The model (or error) message, or None for a blank prompt
        """
        if not self.text.strip():
            return None
        provider = self._require_provider()

        final_prompt = self.interpolated_prompt()
        self.messages = [ChatMessage(role=MessageRole.USER, text=final_prompt)]
        self._conversation_open = True

        return await self._exchange(provider, self.RUN_ERROR_TEXT)

    async def send(self, text: str) -> Optional[ChatMessage]:
        """
        Send a follow-up message in the running conversation.

        Returns:
            The model (or error) message, or None when there is no
            open conversation or ``text`` is blank
        """
        if not self._conversation_open or not text or not text.strip():
            return None
        provider = self._require_provider()

        self.messages.append(ChatMessage(role=MessageRole.USER, text=text))
        return await self._exchange(provider, self.SEND_ERROR_TEXT)

    async def _exchange(self, provider: LLMProvider, error_text: str) -> ChatMessage:
        history = [
            m.to_provider_format() for m in self.messages
            if m.role != MessageRole.ERROR
        ]
        try:
            result = await provider.generate(history, tier=self.model_tier)
            reply = ChatMessage(role=MessageRole.MODEL, text=result.text)
            logger.info("Model %s replied in %.0fms", result.model, result.duration)
        except ProviderError as e:
            logger.error("Prompt run failed: %s", e)
            reply = ChatMessage(role=MessageRole.ERROR, text=error_text)

        self.messages.append(reply)
        return reply

    async def optimize(self) -> Optional[OptimizationResult]:
        """
        Replace the text with an optimized rewrite.

        Returns None for a blank prompt. On failure the text is kept.

        Raises:
            OptimizationError: If the provider call fails
        """
        if not self.text.strip():
            return None

        optimizer = PromptOptimizer(self._require_provider())
        result = await optimizer.optimize(self.text)
        self.set_text(result.optimized)
        return result
