"""Variable API routes.

Stateless counterparts of the editing session's variable handling: the
caller holds the slots and cache and sends them with each request.
"""

from fastapi import APIRouter

from ..schemas import (
    ExtractRequest,
    ExtractResponse,
    ReconcileRequest,
    ReconcileResponse,
    InterpolateRequest,
    InterpolateResponse,
    VariableModel,
)
from ...core.types import Variable
from ...variables import (
    VariableCache,
    extract_variable_names,
    find_unfilled,
    interpolate,
    reconcile,
)

router = APIRouter(prefix="/variables", tags=["variables"])


@router.post("/extract", response_model=ExtractResponse)
async def extract(request: ExtractRequest) -> ExtractResponse:
    """Placeholder names in first-occurrence order, without duplicates."""
    return ExtractResponse(variables=extract_variable_names(request.text))


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_variables(request: ReconcileRequest) -> ReconcileResponse:
    """
    Attach values to the placeholders of a changed text.

    A name already in ``previous`` keeps its value; otherwise the value
    comes from ``cache``, falling back to an empty string.
    """
    previous = [Variable(name=v.name, value=v.value) for v in request.previous]
    slots = reconcile(
        extract_variable_names(request.text),
        previous,
        VariableCache(request.cache),
    )
    return ReconcileResponse(
        variables=[VariableModel(name=s.name, value=s.value) for s in slots]
    )


@router.post("/interpolate", response_model=InterpolateResponse)
async def interpolate_text(request: InterpolateRequest) -> InterpolateResponse:
    """Fill the text in one pass; placeholders without a value stay as written."""
    slots = [Variable(name=name, value=value) for name, value in request.values.items()]
    return InterpolateResponse(
        text=interpolate(request.text, slots),
        unfilled=find_unfilled(request.text, slots),
    )
