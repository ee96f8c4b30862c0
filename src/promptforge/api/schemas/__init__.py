"""API schemas."""

from .requests import (
    VariableModel,
    TemplateCreateRequest,
    TemplateUpdateRequest,
    ExtractRequest,
    ReconcileRequest,
    InterpolateRequest,
    ChatTurn,
    RunRequest,
    OptimizeRequest,
)
from .responses import (
    TemplateResponse,
    TemplateListResponse,
    CategoriesResponse,
    ExtractResponse,
    ReconcileResponse,
    InterpolateResponse,
    RunResponse,
    OptimizeResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Requests
    "VariableModel",
    "TemplateCreateRequest",
    "TemplateUpdateRequest",
    "ExtractRequest",
    "ReconcileRequest",
    "InterpolateRequest",
    "ChatTurn",
    "RunRequest",
    "OptimizeRequest",
    # Responses
    "TemplateResponse",
    "TemplateListResponse",
    "CategoriesResponse",
    "ExtractResponse",
    "ReconcileResponse",
    "InterpolateResponse",
    "RunResponse",
    "OptimizeResponse",
    "HealthResponse",
    "ErrorResponse",
]
