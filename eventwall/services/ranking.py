"""Display-order ranker.

The display wall shows approved photos sorted by ``display_order``
ascending (missing orders last), newest first among equal orders.
``display_order`` values need not be unique or contiguous.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.exceptions import InvalidState
from eventwall.models.photo import Photo, PhotoStatus
from eventwall.schemas.photo import DisplayImageDTO, PhotoOrder
from eventwall.services.base_service import BaseService


class Rankable(Protocol):
    id: int
    status: PhotoStatus
    display_order: int | None
    created_at: datetime


def display_sort_key(photo: Rankable) -> tuple:
    """Sort key: (order missing, order asc, created_at desc, id desc)."""
    missing = photo.display_order is None
    return (
        missing,
        0 if missing else photo.display_order,
        -photo.created_at.timestamp(),
        -photo.id,
    )


def compute_ordered_list(photos: Iterable[Rankable]) -> list[Rankable]:
    """Approved photos in display sequence. Pure; the input is not modified."""
    approved = [p for p in photos if p.status == PhotoStatus.APPROVED]
    return sorted(approved, key=display_sort_key)


def to_display_image(photo: Photo) -> DisplayImageDTO:
    return DisplayImageDTO(
        id=photo.id,
        original_path=photo.original_path,
        submitter_name=photo.submitter_name or "Anonymous",
        caption=photo.caption,
        display_order=photo.display_order,
        created_at=photo.created_at,
    )


class RankingService(BaseService[Photo]):
    """Curator reordering over the photo store."""

    not_found_message = "Photo not found"

    def __init__(self, db: AsyncSession):
        super().__init__(db, Photo)

    async def next_display_order(self, event_id: int, exclude_id: int | None = None) -> int:
        """Slot after the last approved photo of the event (0 when none)."""
        query = select(func.max(Photo.display_order)).where(
            Photo.event_id == event_id,
            Photo.status == PhotoStatus.APPROVED,
        )
        if exclude_id is not None:
            query = query.where(Photo.id != exclude_id)

        current_max = (await self.db.execute(query)).scalar()
        return 0 if current_max is None else current_max + 1

    async def get_ordered(self, event_id: int) -> list[Photo]:
        result = await self.db.execute(
            select(Photo).where(
                Photo.event_id == event_id,
                Photo.status == PhotoStatus.APPROVED,
            )
        )
        return compute_ordered_list(result.scalars().all())

    async def get_display_images(self, event_id: int) -> list[DisplayImageDTO]:
        """Ranked list served to the display wall."""
        return [to_display_image(p) for p in await self.get_ordered(event_id)]

    async def reorder(self, orders: list[PhotoOrder]) -> list[Photo]:
        """Assign display orders in one batch.

        Unknown photo ids are skipped; the result lists only the photos
        actually updated. A photo named twice takes its last value.
        """
        if not orders:
            return []

        ids = {o.photo_id for o in orders}
        result = await self.db.execute(
            select(Photo).where(Photo.id.in_(ids)).with_for_update()
        )
        photos = {p.id: p for p in result.scalars().all()}

        updated: dict[int, Photo] = {}
        for order in orders:
            photo = photos.get(order.photo_id)
            if photo is None:
                logger.debug(f"Reorder skipped unknown photo {order.photo_id}")
                continue
            photo.display_order = order.display_order
            updated[photo.id] = photo

        await self.db.commit()
        for photo in updated.values():
            await self.db.refresh(photo)

        skipped = len(ids) - len(updated)
        logger.info(f"Reordered {len(updated)} photos ({skipped} skipped)")
        return list(updated.values())

    async def set_display_order(self, photo_id: int, display_order: int) -> Photo:
        """Assign one photo's display order."""
        photo = await self.get_or_404(photo_id, for_update=True)
        photo.display_order = display_order
        return await self.update(photo)

    async def promote_to_front(self, photo_id: int) -> Photo:
        """Make an approved photo first in its event's rotation.

        Every other approved photo of the event with an order is shifted
        back by one, which keeps their relative order.
        """
        photo = await self.get_or_404(photo_id, for_update=True)
        if photo.status != PhotoStatus.APPROVED:
            raise InvalidState(
                f"Photo {photo_id} is {photo.status.value}, only approved photos can be shown"
            )

        result = await self.db.execute(
            select(Photo)
            .where(
                Photo.event_id == photo.event_id,
                Photo.status == PhotoStatus.APPROVED,
                Photo.id != photo.id,
                Photo.display_order.is_not(None),
            )
            .with_for_update()
        )
        for other in result.scalars().all():
            other.display_order += 1

        photo.display_order = 0
        await self.db.commit()
        await self.db.refresh(photo)

        logger.info(f"Photo {photo_id} promoted to front of event {photo.event_id}")
        return photo
