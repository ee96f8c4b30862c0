"""API response schemas."""

from typing import Any, Optional, List, Dict
from pydantic import BaseModel, Field

from .requests import VariableModel


class TemplateResponse(BaseModel):
    """A library template."""
    id: str
    name: str
    description: str = ""
    category: str
    content: str
    tags: List[str] = Field(default_factory=list)
    variables: List[str] = Field(default_factory=list)
    custom: bool = False


class TemplateListResponse(BaseModel):
    """Response listing templates."""
    templates: List[TemplateResponse]
    total: int


class CategoriesResponse(BaseModel):
    """Categories in display order."""
    categories: List[str]


class ExtractResponse(BaseModel):
    """Response for placeholder extraction."""
    variables: List[str]


class ReconcileResponse(BaseModel):
    """Response for slot reconciliation."""
    variables: List[VariableModel]


class InterpolateResponse(BaseModel):
    """Response for template filling."""
    text: str
    unfilled: List[str] = Field(default_factory=list)


class RunResponse(BaseModel):
    """Response for a prompt run."""
    success: bool
    prompt: str
    text: str
    model: str
    tier: str
    tokens: Optional[int] = None
    processing_time_ms: float = 0.0


class OptimizeResponse(BaseModel):
    """Response for prompt optimization."""
    success: bool
    original_prompt: str
    optimized_prompt: str
    changed: bool
    variables: List[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0


class HealthResponse(BaseModel):
    """Response for health check."""
    status: str
    version: str
    components: Dict[str, str] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
