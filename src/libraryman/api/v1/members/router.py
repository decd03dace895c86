"""Member API Routes - Route registration only."""

from fastapi import APIRouter

from libraryman.api.v1 import MEMBERS_PREFIX
from libraryman.api.v1.members import api

router = APIRouter()
router.include_router(api.router, prefix=MEMBERS_PREFIX, tags=["members"])
