"""FastAPI application factory."""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.exceptions import PromptForgeError
from .schemas import ErrorResponse

from .routes import (
    templates_router,
    variables_router,
    run_router,
    health_router,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Answer errors that escape a route with an ErrorResponse body."""

    @app.exception_handler(PromptForgeError)
    async def handle_forge_error(request: Request, exc: PromptForgeError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        body = ErrorResponse(**exc.to_dict())
        return JSONResponse(status_code=exc.http_status, content=body.model_dump())


def create_app(
    title: str = "PromptForge API",
    description: str = "Prompt templates with {{variables}}, filled and run against an LLM",
    version: str = "1.0.0",
    enable_cors: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title
        description: API description
        version: API version
        enable_cors: Whether to enable CORS
        cors_origins: Allowed CORS origins (default: PF_CORS_ORIGINS)

    Returns:
        Configured FastAPI application
    """
    from ..core.config import get_settings
    from ..core.logging import configure_logging

    settings = get_settings()
    configure_logging(settings.logging)

    app = FastAPI(
        title=title,
        description=description,
        version=version,
        debug=settings.api.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins or settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(templates_router, prefix="/api/v1")
    app.include_router(variables_router, prefix="/api/v1")
    app.include_router(run_router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()


def run_server(
    host: str = "0.0.0.0",
    port: int = 8000,
    reload: bool = False,
    workers: int = 1
) -> None:
    """
    Run the API server.

    Args:
        host: Host to bind to
        port: Port to listen on
        reload: Enable auto-reload
        workers: Number of worker processes
    """
    import uvicorn

    uvicorn.run(
        "promptforge.api.app:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers
    )


if __name__ == "__main__":
    run_server()
