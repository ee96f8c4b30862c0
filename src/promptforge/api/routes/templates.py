"""Template library API routes."""

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_library
from ..schemas import (
    TemplateCreateRequest,
    TemplateUpdateRequest,
    TemplateResponse,
    TemplateListResponse,
    CategoriesResponse,
    ErrorResponse,
)
from ...core.exceptions import TemplateError, TemplateNotFoundError, StoreError
from ...core.types import Template
from ...library import TemplateLibrary
from ...variables import extract_variable_names

router = APIRouter(prefix="/templates", tags=["templates"])


def _to_response(template: Template) -> TemplateResponse:
    return TemplateResponse(
        id=template.id,
        name=template.name,
        description=template.description,
        category=template.category,
        content=template.content,
        tags=list(template.tags),
        variables=extract_variable_names(template.content),
        custom=template.is_custom,
    )


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    category: str = None,
    search: str = None,
    library: TemplateLibrary = Depends(get_library)
) -> TemplateListResponse:
    """
    List built-in templates followed by saved ones.

    Optionally filter by exact category or a search term matched
    against name, description, and tags.
    """
    templates = library.search(search) if search else library.list_templates()
    if category:
        templates = [t for t in templates if t.category == category]

    return TemplateListResponse(
        templates=[_to_response(t) for t in templates],
        total=len(templates)
    )


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(library: TemplateLibrary = Depends(get_library)) -> CategoriesResponse:
    """Distinct categories in first-seen order."""
    return CategoriesResponse(categories=library.categories())


@router.get(
    "/{template_id}",
    response_model=TemplateResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_template(template_id: str, library: TemplateLibrary = Depends(get_library)) -> TemplateResponse:
    """Get one template by id."""
    try:
        return _to_response(library.get(template_id))
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.post(
    "",
    response_model=TemplateResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def create_template(
    request: TemplateCreateRequest,
    library: TemplateLibrary = Depends(get_library)
) -> TemplateResponse:
    """Save a new user template (id ``custom_<ms>``, tagged ``custom``)."""
    try:
        template = library.save(
            content=request.content,
            name=request.name,
            description=request.description,
            category=request.category,
        )
    except TemplateError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return _to_response(template)


@router.put(
    "/{template_id}",
    response_model=TemplateResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_template(
    template_id: str,
    request: TemplateUpdateRequest,
    library: TemplateLibrary = Depends(get_library)
) -> TemplateResponse:
    """
    Update a saved template in place.

    Built-in templates are read-only; save a copy with POST instead.
    """
    try:
        current = library.get(template_id)
        if not current.is_custom:
            raise TemplateError("Built-in templates cannot be modified", template_id=template_id)
        template = library.save(
            content=request.content,
            name=request.name,
            description=request.description,
            category=request.category,
            template_id=template_id,
        )
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except TemplateError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return _to_response(template)


@router.delete(
    "/{template_id}",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def delete_template(template_id: str, library: TemplateLibrary = Depends(get_library)) -> dict:
    """Delete a saved template."""
    try:
        template = library.delete(template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except TemplateError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return {"deleted": template.id}
