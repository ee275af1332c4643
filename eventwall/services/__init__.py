"""Service layer for business logic."""

from eventwall.services.analytics_service import AnalyticsService
from eventwall.services.auth_service import AuthService
from eventwall.services.display_service import DisplayService
from eventwall.services.event_service import EventService
from eventwall.services.moderation_service import ModerationService
from eventwall.services.photo_service import PhotoService
from eventwall.services.ranking import RankingService, compute_ordered_list
from eventwall.services.user_service import UserService

__all__ = [
    "AnalyticsService",
    "AuthService",
    "DisplayService",
    "EventService",
    "ModerationService",
    "PhotoService",
    "RankingService",
    "UserService",
    "compute_ordered_list",
]
