"""API request schemas."""

from typing import Literal, Optional, List, Dict
from pydantic import BaseModel, Field


class VariableModel(BaseModel):
    """A variable slot."""
    name: str
    value: str = ""


class TemplateCreateRequest(BaseModel):
    """Request to save a user template."""
    content: str = Field(..., description="Template text with {{variables}}")
    name: str = Field(..., description="Template name")
    description: str = Field("", description="Short description")
    category: str = Field("Custom", description="Category shown in the library")


class TemplateUpdateRequest(TemplateCreateRequest):
    """Request to update a user template in place."""


class ExtractRequest(BaseModel):
    """Request for placeholder extraction."""
    text: str = Field(..., description="Template text to scan")


class ReconcileRequest(BaseModel):
    """Request to reconcile slots after a text change."""
    text: str = Field(..., description="The new template text")
    previous: List[VariableModel] = Field(
        default_factory=list,
        description="Slots held before the change"
    )
    cache: Dict[str, str] = Field(
        default_factory=dict,
        description="Values remembered by name"
    )


class InterpolateRequest(BaseModel):
    """Request to fill a template."""
    text: str = Field(..., description="Template text with {{variables}}")
    values: Dict[str, str] = Field(
        default_factory=dict,
        description="Variable values by name"
    )


class ChatTurn(BaseModel):
    """A prior conversation turn."""
    role: Literal["user", "model"] = Field(..., description="user or model")
    text: str


class RunRequest(BaseModel):
    """Request to fill a prompt and run it."""
    prompt: Optional[str] = Field(None, description="Template text (or use template_id)")
    template_id: Optional[str] = Field(None, description="Library template to run")
    values: Dict[str, str] = Field(
        default_factory=dict,
        description="Variable values by name"
    )
    tier: Optional[str] = Field(
        None,
        description="Model tier: flash, pro, thinking_pro (default: PF_DEFAULT_TIER)"
    )
    history: List[ChatTurn] = Field(
        default_factory=list,
        description="Earlier turns, sent before the filled prompt"
    )


class OptimizeRequest(BaseModel):
    """Request for prompt optimization."""
    prompt: str = Field(..., description="The prompt to rewrite")
