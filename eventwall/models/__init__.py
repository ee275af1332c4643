"""Database models."""

from eventwall.models.analytics import DailyAnalytics
from eventwall.models.display_settings import DisplaySettings
from eventwall.models.event import Event
from eventwall.models.photo import ModerationAction, Photo, PhotoStatus
from eventwall.models.user import User

__all__ = [
    "DailyAnalytics",
    "DisplaySettings",
    "Event",
    "ModerationAction",
    "Photo",
    "PhotoStatus",
    "User",
]
