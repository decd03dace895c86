"""
Application lifecycle management.

Handles startup and shutdown events for the FastAPI application.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from libraryman.config import get_settings
from libraryman.infrastructure import InfrastructureFactory
from libraryman.services.member_cache import MemberLookupCache


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Creates the process-wide infrastructure factory and member lookup
    cache on startup and drops cached member views on shutdown.

    Args:
        app: FastAPI application instance
    """
    # Startup
    settings = get_settings()
    logger.info(" Starting LibraryMan backend...")
    logger.info(f"Application version: {app.version}")

    app.state.infrastructure = InfrastructureFactory.from_settings(settings)
    app.state.member_cache = MemberLookupCache(
        ttl_seconds=settings.member_cache_ttl_seconds,
        max_entries=settings.member_cache_max_entries,
    )
    logger.info(f"Infrastructure provider: {app.state.infrastructure.provider}")

    yield

    # Shutdown
    logger.info(" Shutting down LibraryMan backend...")
    app.state.member_cache.clear()
