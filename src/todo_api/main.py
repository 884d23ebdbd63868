from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .db import init_db
from .errors import NotFoundError, StoreError, ValidationError
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "todos", "description": "CRUD operations for Todo items."},
]

GENERIC_ERROR = "An unexpected error occurred."
MALFORMED_BODY = "Request body is malformed."


async def validation_error_handler(request: Request, exc: ValidationError) -> PlainTextResponse:
    """Invalid caller input: 400 with the reason as plain text."""
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)


async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    """Unknown id: empty 404, not logged."""
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def store_error_handler(request: Request, exc: StoreError) -> PlainTextResponse:
    """
    Store failures are not retried. The client gets a generic 500; the
    details only go to the log.
    """
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(GENERIC_ERROR, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    """
    Body or path values FastAPI could not coerce.

    An id that is not a 64-bit integer cannot match a todo, so it is answered like an
    unknown id (404, empty). Anything wrong with the body is a 400.
    """
    if any(err.get("loc", ())[:1] == ("path",) for err in exc.errors()):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return PlainTextResponse(MALFORMED_BODY, status_code=status.HTTP_400_BAD_REQUEST)


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Immutable configuration. Loaded from the environment when
            omitted, in which case a missing DATABASE_URL raises
            ConfigurationError and the app is not built.

    Returns:
        The configured application with the Todos table ensured to exist.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_development
    app = FastAPI(
        title="Todo Service",
        description="Minimal CRUD API over a single Todos table.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings

    init_db(settings.database_path)

    allow_all = ("*" in settings.cors_allow_origins) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(todos_router.router)
    return app


# PUBLIC_INTERFACE
def run() -> None:
    """
    Console entry point: load settings, configure logging and serve the app.

    Configuration errors propagate and abort startup.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
