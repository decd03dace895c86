"""
Health check endpoint.

Reports service status along with the storage provider and the size of
the member lookup cache.
"""

from fastapi import APIRouter

from libraryman import __version__
from libraryman.api.v1.health.models import HealthResponse
from libraryman.di import InfrastructureFactoryDep, MemberCacheDep

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    factory: InfrastructureFactoryDep,
    cache: MemberCacheDep,
) -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        Service status and version
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        storage=factory.provider,
        cached_members=len(cache),
    )
