"""Model tier resolution."""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from ..core.types import ModelTier

THINKING_BUDGET = 4096


@dataclass(frozen=True)
class TierSpec:
    """Concrete model settings behind a tier."""
    model: str
    thinking_budget: Optional[int] = None
    label: str = ""


TIER_MODELS: Dict[ModelTier, TierSpec] = {
    ModelTier.FLASH: TierSpec("gemini-2.5-flash", label="Flash 2.5"),
    ModelTier.PRO: TierSpec("gemini-3-pro-preview", label="Pro 3.0"),
    ModelTier.THINKING_PRO: TierSpec(
        "gemini-3-pro-preview",
        thinking_budget=THINKING_BUDGET,
        label="Thinking",
    ),
}


def resolve_tier(tier: Union[str, ModelTier]) -> TierSpec:
    """
    Map a tier (or its string value) to model settings.

    Raises:
        ValueError: If the tier is unknown
    """
    if isinstance(tier, str):
        tier = ModelTier(tier)
    return TIER_MODELS[tier]


def default_tier() -> ModelTier:
    """
    The tier configured by ``PF_DEFAULT_TIER``.

    Raises:
        ConfigurationError: If the setting names no known tier
    """
    from ..core.config import get_settings
    from ..core.exceptions import ConfigurationError

    value = get_settings().provider.default_tier
    try:
        return ModelTier(value)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown model tier '{value}'",
            config_key="PF_DEFAULT_TIER",
            cause=e
        )
