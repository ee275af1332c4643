"""Pydantic schemas for API request/response validation."""

from eventwall.schemas.auth import Token, UserLogin
from eventwall.schemas.display import DisplaySettingsDTO, DisplaySettingsUpdate
from eventwall.schemas.event import EventCreate, EventDTO, EventUpdate
from eventwall.schemas.photo import (
    DisplayImageDTO,
    ModerationRequest,
    PhotoDTO,
    PhotoOrder,
    ReorderRequest,
    SetCurrentImageRequest,
    SetCurrentImageResponse,
)
from eventwall.schemas.qr import QRCodeResponse
from eventwall.schemas.statistics import CounterResponse, DailyAnalyticsDTO, StatsResponse

__all__ = [
    # Auth
    "Token",
    "UserLogin",
    # Display
    "DisplaySettingsDTO",
    "DisplaySettingsUpdate",
    # Event
    "EventCreate",
    "EventDTO",
    "EventUpdate",
    # Photo
    "DisplayImageDTO",
    "ModerationRequest",
    "PhotoDTO",
    "PhotoOrder",
    "ReorderRequest",
    "SetCurrentImageRequest",
    "SetCurrentImageResponse",
    # QR code
    "QRCodeResponse",
    # Statistics
    "CounterResponse",
    "DailyAnalyticsDTO",
    "StatsResponse",
]
