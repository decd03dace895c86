"""Newsletter API Routes - Route registration only."""

from fastapi import APIRouter

from libraryman.api.v1 import NEWSLETTER_PREFIX
from libraryman.api.v1.newsletter import api

router = APIRouter()
router.include_router(api.router, prefix=NEWSLETTER_PREFIX, tags=["newsletter"])
