"""
FastAPI application factory.

Wires Problem Details error handling, trace-id propagation, CORS and the
member, newsletter and health routers into one application.
"""

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from libraryman import __version__
from libraryman.config import get_settings
from libraryman.core.logging import logger
from libraryman.domain.exceptions import LibraryManError
from libraryman.exception_handlers import (
    general_exception_handler,
    http_exception_handler,
    library_error_handler,
    validation_exception_handler,
)
from libraryman.lifespan import lifespan
from libraryman.middleware import TraceIDMiddleware
from libraryman.openapi import configure_openapi
from libraryman.routes import register_routes

EXCEPTION_HANDLERS = (
    (LibraryManError, library_error_handler),
    (HTTPException, http_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, general_exception_handler),
)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    docs = settings.enable_docs

    app = FastAPI(
        title="LibraryMan Backend",
        description="Member accounts and credentials for the LibraryMan library system",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )

    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)

    app.add_middleware(TraceIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=settings.get_cors_allowed_methods(),
        allow_headers=settings.get_cors_allowed_headers(),
        expose_headers=["X-Trace-ID"],
    )

    register_routes(app)
    configure_openapi(app)

    logger.info(
        f"LibraryMan app created (v{__version__}, storage={settings.infrastructure_provider})"
    )
    return app
