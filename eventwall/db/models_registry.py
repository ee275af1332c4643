"""
Model registry.

Import all models here to ensure they are registered with SQLAlchemy metadata
before ``Base.metadata.create_all`` runs.
"""

from eventwall.db.base import Base
from eventwall.models.analytics import DailyAnalytics
from eventwall.models.display_settings import DisplaySettings
from eventwall.models.event import Event
from eventwall.models.photo import Photo
from eventwall.models.user import User

__all__ = [
    "Base",
    "DailyAnalytics",
    "DisplaySettings",
    "Event",
    "Photo",
    "User",
]
