"""
Application setup utilities.

Provides common setup functions for both main.py and lambda_main.py
to avoid code duplication.
"""

from fastapi import FastAPI

from libraryman import __version__
from libraryman.application import create_app
from libraryman.config import get_settings
from libraryman.core.logging import intercept_standard_logging


def add_root_endpoint(app: FastAPI) -> None:
    """
    Add root endpoint to the application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str | None]:
        """Root endpoint with API information."""
        return {
            "message": "LibraryMan Member Service",
            "version": __version__,
            "docs": "/docs" if settings.enable_docs else None,
        }


def build_app() -> FastAPI:
    """
    Build the application served by uvicorn and by the Lambda handler.

    Routes standard-library logging (uvicorn, httpx, pynamodb) through
    loguru before the app is created.

    Returns:
        Configured FastAPI application instance
    """
    intercept_standard_logging()
    app = create_app()
    add_root_endpoint(app)
    return app
