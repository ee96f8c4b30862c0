"""Health check routes."""

from fastapi import APIRouter, Depends

from ..dependencies import get_library
from ..schemas import HealthResponse
from ...core.config import get_settings
from ...providers import provider_registry
from ...library import TemplateLibrary

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(library: TemplateLibrary = Depends(get_library)) -> HealthResponse:
    """
    Health check endpoint.

    Reports whether the template library has templates and whether a
    model provider is configured.
    """
    components = {}

    components["library"] = "healthy" if library.list_templates() else "empty"

    settings = get_settings().provider
    ready = provider_registry.configured({"gemini": settings.gemini_api_key})
    if provider_registry.resolve(settings.default_provider) in ready:
        components["provider"] = "healthy"
    else:
        components["provider"] = "unconfigured"

    all_healthy = all(v == "healthy" for v in components.values())
    status = "healthy" if all_healthy else "degraded"

    return HealthResponse(
        status=status,
        version="1.0.0",
        components=components
    )


@router.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "PromptForge API",
        "version": "1.0.0",
        "description": "Prompt templates with {{variables}}, filled and run against an LLM",
        "docs": "/docs",
        "endpoints": {
            "templates": "/api/v1/templates",
            "variables": "/api/v1/variables",
            "run": "/api/v1/run",
            "optimize": "/api/v1/optimize",
            "health": "/health"
        }
    }
