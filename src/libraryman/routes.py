"""
Routes registration for the FastAPI application.

Centralizes all router registrations for clean application setup.
"""

from fastapi import FastAPI

from libraryman.api.v1.health.router import router as health_router
from libraryman.api.v1.members.router import router as members_router
from libraryman.api.v1.newsletter.router import router as newsletter_router


def register_routes(app: FastAPI) -> None:
    """
    Register all application routers.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, public)
    app.include_router(health_router)

    app.include_router(members_router)
    app.include_router(newsletter_router)
