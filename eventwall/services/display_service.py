"""Display settings service - one settings row per event."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.config import get_settings
from eventwall.core.exceptions import InvalidRequest
from eventwall.models.display_settings import DisplaySettings
from eventwall.schemas.display import DisplaySettingsDTO, DisplaySettingsUpdate
from eventwall.services.base_service import BaseService
from eventwall.services.photo_service import (
    ImageUpload,
    discard_images,
    store_image,
    validate_image,
)

settings = get_settings()

# Columns that must never be cleared by a partial update
NON_NULLABLE_FIELDS = {
    "auto_rotate",
    "slide_interval",
    "display_format",
    "show_info",
    "show_captions",
    "transition_effect",
}


class DisplayService(BaseService[DisplaySettings]):
    """Display settings: created with defaults on first access, never deleted."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, DisplaySettings)

    async def _get_or_create(self, event_id: int) -> DisplaySettings:
        result = await self.db.execute(
            select(DisplaySettings).where(DisplaySettings.event_id == event_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            row = await self.create(
                DisplaySettings(
                    event_id=event_id,
                    auto_rotate=True,
                    slide_interval=settings.default_slide_interval,
                    display_format="16:9-default",
                    show_info=True,
                    show_captions=True,
                    transition_effect="slide",
                )
            )
            logger.info(f"Display settings created for event {event_id}")
        return row

    async def get_settings(self, event_id: int) -> DisplaySettingsDTO:
        return DisplaySettingsDTO.model_validate(await self._get_or_create(event_id))

    async def update_settings(
        self, event_id: int, data: DisplaySettingsUpdate
    ) -> DisplaySettingsDTO:
        """Apply only the fields present in the payload."""
        row = await self._get_or_create(event_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field in NON_NULLABLE_FIELDS:
                continue
            setattr(row, field, value)

        row = await self.update(row)
        logger.info(f"Display settings updated for event {event_id}: {sorted(changes)}")
        return DisplaySettingsDTO.model_validate(row)

    async def upload_background(self, event_id: int, upload: ImageUpload) -> DisplaySettingsDTO:
        """Store a background image and point the event's wall at it."""
        problem = validate_image(upload)
        if problem:
            logger.warning(f"Rejected background for event {event_id}: {problem}")
            raise InvalidRequest(problem)

        row = await self._get_or_create(event_id)
        path, url = store_image(upload)
        row.background_path = url
        try:
            row = await self.update(row)
        except Exception:
            await self.db.rollback()
            discard_images([path])
            raise

        logger.info(f"Background for event {event_id} set to {url}")
        return DisplaySettingsDTO.model_validate(row)
