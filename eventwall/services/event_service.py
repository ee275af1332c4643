"""Event service - owning grouping for photos, settings and analytics."""

import re

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventwall.core.config import get_settings
from eventwall.core.exceptions import InvalidRequest, NotFound
from eventwall.models.analytics import DailyAnalytics
from eventwall.models.display_settings import DisplaySettings
from eventwall.models.event import Event
from eventwall.models.photo import Photo
from eventwall.schemas.event import EventCreate, EventDTO, EventUpdate
from eventwall.services.base_service import BaseService

settings = get_settings()


def generate_slug(name: str) -> str:
    """Derive a URL slug (lowercase letters, digits, hyphens) from a name."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "event"


class EventService(BaseService[Event]):
    """Event CRUD and default event resolution."""

    not_found_message = "Event not found"

    def __init__(self, db: AsyncSession):
        super().__init__(db, Event)

    async def get_by_slug(self, slug: str) -> Event | None:
        """Get event by slug."""
        result = await self.db.execute(select(Event).where(Event.slug == slug))
        return result.scalar_one_or_none()

    async def list_events(self) -> list[EventDTO]:
        """All events, newest first."""
        result = await self.db.execute(
            select(Event).order_by(Event.created_at.desc(), Event.id.desc())
        )
        return [EventDTO.model_validate(e) for e in result.scalars().all()]

    async def get_event(self, event_id: int) -> EventDTO:
        return EventDTO.model_validate(await self.get_or_404(event_id))

    async def get_event_by_slug(self, slug: str) -> EventDTO:
        event = await self.get_by_slug(slug)
        if not event:
            raise NotFound(self.not_found_message)
        return EventDTO.model_validate(event)

    async def create_event(self, data: EventCreate) -> EventDTO:
        """Create event, generating the slug from the name when omitted."""
        slug = data.slug or generate_slug(data.name)
        if await self.get_by_slug(slug):
            raise InvalidRequest(f"Slug already exists: {slug}")

        event = Event(
            name=data.name,
            slug=slug,
            description=data.description,
            start_date=data.start_date,
            end_date=data.end_date,
            is_active=data.is_active,
        )
        event = await self.create(event)
        logger.info(f"Event created: {event.id} ({event.slug})")
        return EventDTO.model_validate(event)

    async def update_event(self, event_id: int, data: EventUpdate) -> EventDTO:
        """Apply the fields present in the payload."""
        event = await self.get_or_404(event_id)
        changes = data.model_dump(exclude_unset=True)

        new_slug = changes.get("slug")
        if new_slug and new_slug != event.slug:
            existing = await self.get_by_slug(new_slug)
            if existing:
                raise InvalidRequest(f"Slug already exists: {new_slug}")

        for field, value in changes.items():
            if value is None and field in ("name", "slug", "is_active"):
                continue
            setattr(event, field, value)

        event = await self.update(event)
        return EventDTO.model_validate(event)

    async def delete_event(self, event_id: int) -> None:
        """Delete an event together with its photos, settings and counters."""
        event = await self.get_or_404(event_id)
        for model in (Photo, DisplaySettings, DailyAnalytics):
            await self.db.execute(delete(model).where(model.event_id == event_id))
        await self.delete(event)
        logger.info(f"Event deleted: {event_id}")

    async def ensure_default_event(self) -> Event:
        """Return the default event, creating it on first use."""
        event = await self.get_by_slug(settings.default_event_slug)
        if event:
            return event

        event = await self.create(
            Event(
                name=settings.default_event_name,
                slug=settings.default_event_slug,
                is_active=True,
            )
        )
        logger.info(f"Default event created: {event.id} ({event.slug})")
        return event

    async def resolve_event_id(self, event_id: int | None) -> int:
        """Validate an explicit event id, or fall back to the default event."""
        if event_id is None:
            return (await self.ensure_default_event()).id
        await self.get_or_404(event_id)
        return event_id
