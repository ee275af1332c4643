"""API router initialization."""

from fastapi import APIRouter

from eventwall.api.v1 import router as v1_router
from eventwall.core.config import get_settings

router = APIRouter()
router.include_router(v1_router, prefix=get_settings().api_prefix)
