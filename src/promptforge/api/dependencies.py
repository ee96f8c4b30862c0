"""Shared route dependencies (overridable in tests via ``app.dependency_overrides``)."""

from functools import lru_cache
from typing import AsyncIterator

from fastapi import HTTPException

from ..core.exceptions import ConfigurationError
from ..library import TemplateLibrary, library_from_settings
from ..providers import LLMProvider, get_provider


@lru_cache()
def get_library() -> TemplateLibrary:
    """One library per process, built from settings."""
    return library_from_settings()


async def get_llm_provider() -> AsyncIterator[LLMProvider]:
    """Provider for the duration of one request."""
    try:
        provider = get_provider()
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=e.message)

    try:
        yield provider
    finally:
        await provider.close()
