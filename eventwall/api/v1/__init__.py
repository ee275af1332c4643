"""API v1 router initialization."""

from fastapi import APIRouter

from eventwall.api.v1.auth import router as auth_router
from eventwall.api.v1.display import router as display_router
from eventwall.api.v1.display import settings_router as display_settings_router
from eventwall.api.v1.events import router as events_router
from eventwall.api.v1.photos import router as photos_router
from eventwall.api.v1.qr import router as qr_router
from eventwall.api.v1.statistics import analytics_router
from eventwall.api.v1.statistics import router as stats_router

router = APIRouter()

router.include_router(auth_router, prefix="/auth", tags=["Auth"])
router.include_router(events_router, prefix="/events", tags=["Events"])
router.include_router(photos_router, prefix="/photos", tags=["Photos"])
router.include_router(display_router, prefix="/display", tags=["Display"])
router.include_router(display_settings_router, prefix="/display-settings", tags=["Display"])
router.include_router(qr_router, prefix="/qrcode", tags=["QR Code"])
router.include_router(stats_router, prefix="/stats", tags=["Statistics"])
router.include_router(analytics_router, prefix="/analytics", tags=["Statistics"])
