"""Prompt run and optimization API routes."""

import time

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_library, get_llm_provider
from ..schemas import (
    RunRequest,
    RunResponse,
    OptimizeRequest,
    OptimizeResponse,
    ErrorResponse,
)
from ...core.exceptions import OptimizationError, ProviderError, TemplateNotFoundError
from ...core.types import ModelTier
from ...library import TemplateLibrary
from ...optimizer import PromptOptimizer
from ...providers import LLMProvider, default_tier
from ...variables import extract_variable_names, VariableReconciler, VariableCache, interpolate

router = APIRouter(tags=["run"])

VALID_TIERS = ", ".join(t.value for t in ModelTier)


@router.post(
    "/run",
    response_model=RunResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}}
)
async def run_prompt(
    request: RunRequest,
    library: TemplateLibrary = Depends(get_library),
    provider: LLMProvider = Depends(get_llm_provider)
) -> RunResponse:
    """
    Fill a prompt with the given values and send it to the model.

    Tiers:
    - **flash**: fast model
    - **pro**: high-capability model
    - **thinking_pro**: high-capability model with a reasoning budget

    Earlier turns in ``history`` are sent ahead of the filled prompt.
    """
    start_time = time.time()

    try:
        tier = ModelTier(request.tier) if request.tier else default_tier()
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid tier: {request.tier}. Valid options: {VALID_TIERS}"
        )

    if request.template_id:
        try:
            text = library.get(request.template_id).content
        except TemplateNotFoundError as e:
            raise HTTPException(status_code=404, detail=e.message)
    else:
        text = request.prompt or ""

    if not text.strip():
        raise HTTPException(status_code=400, detail="No prompt provided")

    reconciler = VariableReconciler(VariableCache(request.values))
    final_prompt = interpolate(text, reconciler.refresh(text))

    messages = [
        {"role": "assistant" if turn.role == "model" else turn.role, "content": turn.text}
        for turn in request.history
    ]
    messages.append({"role": "user", "content": final_prompt})

    try:
        result = await provider.generate(messages, tier=tier)
    except ProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return RunResponse(
        success=True,
        prompt=final_prompt,
        text=result.text,
        model=result.model,
        tier=tier.value,
        tokens=result.tokens,
        processing_time_ms=(time.time() - start_time) * 1000
    )


@router.post(
    "/optimize",
    response_model=OptimizeResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}}
)
async def optimize_prompt(
    request: OptimizeRequest,
    provider: LLMProvider = Depends(get_llm_provider)
) -> OptimizeResponse:
    """Rewrite a prompt for clarity, keeping its {{variables}}."""
    start_time = time.time()

    if not request.prompt.strip():
        raise HTTPException(status_code=400, detail="No prompt provided")

    try:
        result = await PromptOptimizer(provider).optimize(request.prompt)
    except OptimizationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return OptimizeResponse(
        success=True,
        original_prompt=result.original,
        optimized_prompt=result.optimized,
        changed=result.changed,
        variables=extract_variable_names(result.optimized),
        processing_time_ms=(time.time() - start_time) * 1000
    )
