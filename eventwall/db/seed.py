"""Database seeder for demo data."""

import asyncio
import base64
import random

from loguru import logger

from eventwall.db import models_registry  # noqa: F401 - Import to register models
from eventwall.db.base import Base
from eventwall.db.session import async_session_maker, engine
from eventwall.models.photo import ModerationAction
from eventwall.schemas.event import EventCreate
from eventwall.services.event_service import EventService
from eventwall.services.moderation_service import ModerationService
from eventwall.services.photo_service import PhotoService
from eventwall.services.user_service import UserService

# 1x1 transparent PNG
PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

SUBMITTERS = ["Alice", "Bob", "Chen", "Dana", "Emeka", None]
CAPTIONS = [
    "First dance!",
    "Cake time",
    "The whole crew",
    "Sunset over the venue",
    None,
]

# Moderation applied to the seeded photos, in upload order; None leaves it pending
DEMO_ACTIONS: list[ModerationAction | None] = [
    ModerationAction.APPROVE,
    ModerationAction.APPROVE,
    ModerationAction.APPROVE,
    ModerationAction.REJECT,
    None,
    None,
    ModerationAction.APPROVE,
    ModerationAction.ARCHIVE,
]


async def create_tables():
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")


async def seed_users():
    """Seed the curator account."""
    async with async_session_maker() as db:
        await UserService(db).ensure_admin()
    logger.info("Seeded admin user")


async def seed_events() -> list[int]:
    """Seed the default event and a demo event; returns their ids."""
    async with async_session_maker() as db:
        service = EventService(db)
        default = await service.ensure_default_event()

        demo = await service.get_by_slug("demo-wedding")
        if demo is None:
            created = await service.create_event(
                EventCreate(name="Demo Wedding", slug="demo-wedding")
            )
            demo_id = created.id
        else:
            demo_id = demo.id

    logger.info("Seeded events")
    return [default.id, demo_id]


async def seed_photos(event_id: int) -> int:
    """Upload placeholder photos and moderate some of them."""
    async with async_session_maker() as db:
        photos = PhotoService(db)
        moderation = ModerationService(db)

        for action in DEMO_ACTIONS:
            photo = await photos.ingest(
                event_id=event_id,
                content=PLACEHOLDER_PNG,
                filename="demo.png",
                content_type="image/png",
                submitter_name=random.choice(SUBMITTERS),
                caption=random.choice(CAPTIONS),
            )
            if action is not None:
                await moderation.moderate(photo.id, action)

    logger.info(f"Seeded {len(DEMO_ACTIONS)} photos for event {event_id}")
    return len(DEMO_ACTIONS)


async def seed_all():
    """Seed all demo data."""
    logger.info("Starting database seeding...")

    await create_tables()
    await seed_users()
    for event_id in await seed_events():
        await seed_photos(event_id)

    logger.info("Database seeding completed!")


async def clear_all():
    """Clear all data from tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables cleared and recreated")


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "--clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())
