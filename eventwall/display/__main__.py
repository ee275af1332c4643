"""Run a display wall against the API: ``python -m eventwall.display``."""

import asyncio

from loguru import logger

from eventwall.core.config import get_settings
from eventwall.core.log import setup_logging
from eventwall.display.client import DisplayClient
from eventwall.display.scheduler import SlideshowScheduler
from eventwall.display.session import SlideshowSession

settings = get_settings()


def log_current(state: SlideshowScheduler) -> None:
    image = state.current
    if image is None:
        logger.info("No approved photos yet")
        return
    logger.info(
        f"Showing {state.current_index + 1}/{len(state.images)}: "
        f"photo {image.id} by {image.submitter_name} ({image.original_path})"
    )


async def run() -> None:
    session = SlideshowSession(DisplayClient(), on_change=log_current)
    await session.start()
    try:
        await asyncio.Event().wait()
    finally:
        await session.close()


if __name__ == "__main__":
    setup_logging(settings.log_level)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Display stopped")
