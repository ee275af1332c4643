"""Moderation engine - photo status state machine."""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.exceptions import InvalidState
from eventwall.models.photo import ModerationAction, Photo, PhotoStatus
from eventwall.services.analytics_service import AnalyticsService
from eventwall.services.photo_service import PhotoService
from eventwall.services.ranking import RankingService

# Legal edges. Nothing leads back to pending; self-transitions are no-ops.
# Archiving straight from pending is allowed: every action applies to any state.
ALLOWED_TRANSITIONS: dict[PhotoStatus, frozenset[PhotoStatus]] = {
    PhotoStatus.PENDING: frozenset(
        {PhotoStatus.APPROVED, PhotoStatus.REJECTED, PhotoStatus.ARCHIVED}
    ),
    PhotoStatus.APPROVED: frozenset({PhotoStatus.REJECTED, PhotoStatus.ARCHIVED}),
    PhotoStatus.REJECTED: frozenset({PhotoStatus.APPROVED, PhotoStatus.ARCHIVED}),
    PhotoStatus.ARCHIVED: frozenset({PhotoStatus.APPROVED, PhotoStatus.REJECTED}),
}


def next_status(current: PhotoStatus, action: ModerationAction) -> PhotoStatus:
    """Status a photo ends up in after ``action``.

    Raises InvalidState for an edge outside ALLOWED_TRANSITIONS.
    """
    target = action.target_status
    if target != current and target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidState(f"Cannot move photo from {current.value} to {target.value}")
    return target


def counter_for(action: ModerationAction) -> str:
    """Daily analytics counter bumped by ``action``."""
    match action:
        case ModerationAction.APPROVE:
            return "approved"
        case ModerationAction.REJECT:
            return "rejected"
        case ModerationAction.ARCHIVE:
            return "archived"


class ModerationService:
    """Applies moderation actions in one transaction per call."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.photos = PhotoService(db)
        self.ranking = RankingService(db)
        self.analytics = AnalyticsService(db)

    async def moderate(self, photo_id: int, action: ModerationAction) -> Photo:
        """Set the photo's status from ``action`` and count the action.

        Repeating an action re-applies the same status and counts again.
        A photo entering approved without an order is appended to the end
        of its event's rotation; leaving approved keeps the stale order.
        """
        photo = await self.photos.get_or_404(photo_id, for_update=True)
        previous = photo.status
        photo.status = next_status(previous, action)

        if photo.status == PhotoStatus.APPROVED and photo.display_order is None:
            photo.display_order = await self.ranking.next_display_order(
                photo.event_id, exclude_id=photo.id
            )

        await self.analytics.increment(photo.event_id, counter_for(action))
        await self.db.commit()
        await self.db.refresh(photo)

        logger.info(
            f"Photo {photo.id} moderated: {previous.value} -> {photo.status.value} "
            f"(action={action.value}, order={photo.display_order})"
        )
        return photo
